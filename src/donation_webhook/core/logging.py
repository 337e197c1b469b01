import logging.config


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging with a single console handler.

    Uvicorn's own loggers propagate to root so access lines share the format.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level.upper(), "handlers": ["console"]},
            "loggers": {
                "uvicorn": {"handlers": [], "propagate": True},
                "uvicorn.access": {"handlers": [], "propagate": True},
                "uvicorn.error": {"handlers": [], "propagate": True},
            },
        }
    )


def mask_email(email: str) -> str:
    """a@example.com -> ***@example.com"""
    if "@" not in email:
        return "***"
    return "***@" + email.rsplit("@", 1)[1]
