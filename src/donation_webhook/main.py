from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from donation_webhook.api.v1.routers.health import router as health_router
from donation_webhook.api.v1.routers.stripe_webhook import router as stripe_router
from donation_webhook.core.config import Settings
from donation_webhook.core.logging import setup_logging
from donation_webhook.integrations.resend.email import ResendNotifier
from donation_webhook.integrations.supabase.user_profiles import SupabaseUserStore
from donation_webhook.services.ports import (
    FailureSink,
    LoggingFailureSink,
    Notifier,
    UserStore,
)

logger = logging.getLogger(__name__)


def build_user_store(settings: Settings) -> SupabaseUserStore:
    return SupabaseUserStore(
        settings.supabase_url,
        settings.supabase_service_role_key.get_secret_value(),
        table=settings.supabase_profiles_table,
        timeout=settings.http_timeout_sec,
    )


def build_notifier(settings: Settings) -> ResendNotifier | None:
    if settings.resend_api_key is None:
        return None
    return ResendNotifier(
        settings.resend_api_key.get_secret_value(),
        settings.email_from,
        timeout=settings.http_timeout_sec,
    )


def create_app(
    settings: Settings | None = None,
    *,
    store: UserStore | None = None,
    notifier: Notifier | None = None,
    failures: FailureSink | None = None,
) -> FastAPI:
    """
    Build the app with its collaborators fixed up front.

    Settings() raises a ValidationError here when required env vars are missing.
    Passing store/notifier/failures replaces the Supabase/Resend/logging defaults.
    """
    settings = settings or Settings()

    app = FastAPI(title="Donation Webhook", version="0.1.0")
    app.state.settings = settings
    app.state.user_store = store if store is not None else build_user_store(settings)
    app.state.notifier = notifier if notifier is not None else build_notifier(settings)
    app.state.failure_sink = failures if failures is not None else LoggingFailureSink()

    app.include_router(health_router)
    app.include_router(stripe_router)
    return app


def run() -> None:
    settings = Settings()
    setup_logging(settings.log_level)

    if not settings.email_enabled:
        logger.warning("RESEND_API_KEY is not set; thank-you emails are disabled")

    app = create_app(settings)
    logger.info("Webhook server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
