from __future__ import annotations

import hashlib
import hmac
import json
import time
from datetime import datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient

from donation_webhook.core.config import Settings
from donation_webhook.core.errors import NotificationFailed, StoreUpdateFailed
from donation_webhook.main import create_app

WEBHOOK_SECRET = "whsec_test_secret"


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header the way Stripe does."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed_payload = f"{ts}.".encode() + payload
    sig = hmac.new(secret.encode(), signed_payload, hashlib.sha256).hexdigest()
    return f"t={ts},v1={sig}"


def checkout_event(email: str | None = "a@example.com", name: str | None = "Ada") -> dict[str, Any]:
    details: dict[str, Any] = {}
    if email is not None:
        details["email"] = email
    if name is not None:
        details["name"] = name
    return {
        "id": "evt_test_123",
        "object": "event",
        "type": "checkout.session.completed",
        "data": {"object": {"id": "cs_test_123", "customer_details": details}},
    }


def encode(event: dict[str, Any]) -> bytes:
    return json.dumps(event).encode()


class FakeUserStore:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, datetime]] = []

    def mark_donated(self, email: str, donated_at: datetime) -> None:
        self.calls.append((email, donated_at))
        if self.fail:
            raise StoreUpdateFailed(email, "boom")


class FakeNotifier:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[dict[str, str]] = []

    def send(self, to: str, subject: str, html: str) -> str:
        self.sent.append({"to": to, "subject": subject, "html": html})
        if self.error is not None:
            raise self.error
        return "email_123"


class RecordingSink:
    def __init__(self) -> None:
        self.errors: list[NotificationFailed] = []

    def record(self, error: NotificationFailed) -> None:
        self.errors.append(error)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        stripe_webhook_secret=WEBHOOK_SECRET,
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-role-key",
        resend_api_key=None,
    )


@pytest.fixture
def store() -> FakeUserStore:
    return FakeUserStore()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def client(settings, store, notifier, sink) -> TestClient:
    app = create_app(settings, store=store, notifier=notifier, failures=sink)
    return TestClient(app)
