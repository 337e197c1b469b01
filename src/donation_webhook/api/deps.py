from fastapi import Request

from donation_webhook.core.config import Settings
from donation_webhook.services.ports import FailureSink, Notifier, UserStore


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: settings validated at startup"""
    return request.app.state.settings


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_notifier(request: Request) -> Notifier | None:
    return request.app.state.notifier


def get_failure_sink(request: Request) -> FailureSink:
    return request.app.state.failure_sink
