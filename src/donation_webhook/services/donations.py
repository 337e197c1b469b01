from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from donation_webhook.core.errors import MissingField, NotificationFailed, StoreUpdateFailed
from donation_webhook.core.logging import mask_email
from donation_webhook.core.stripe_events import CHECKOUT_SESSION_COMPLETED
from donation_webhook.services.notifications.templates import (
    donation_thank_you_html,
    donation_thank_you_subject,
)
from donation_webhook.services.ports import FailureSink, Notifier, UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookResult:
    status_code: int
    body: str


@dataclass(frozen=True)
class Donor:
    email: str
    name: str = ""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def extract_donor(event: dict[str, Any]) -> Donor:
    """
    data.object.customer_details -> Donor. Raises MissingField when the
    email is absent or empty; name falls back to "".
    """
    session = _as_dict(_as_dict(event.get("data")).get("object"))
    details = _as_dict(session.get("customer_details"))

    email = details.get("email")
    if not isinstance(email, str) or not email.strip():
        raise MissingField("email")

    name = details.get("name")
    return Donor(email=email, name=name if isinstance(name, str) else "")


def handle_stripe_event(
    event: dict[str, Any],
    *,
    store: UserStore,
    notifier: Notifier | None,
    failures: FailureSink,
    now: Callable[[], datetime] = _utcnow,
) -> WebhookResult:
    """
    Apply one verified Stripe event.

    MissingField and StoreUpdateFailed propagate to the caller. A failed
    thank-you email never does: it goes to `failures` and the result stays 200.
    """
    event_type = event.get("type")
    if event_type != CHECKOUT_SESSION_COMPLETED:
        logger.info("Ignoring Stripe event %s (%s)", event.get("id"), event_type)
        return WebhookResult(200, "Unhandled event")

    try:
        donor = extract_donor(event)
    except MissingField:
        logger.warning("Stripe event %s has no customer email", event.get("id"))
        raise

    # A failed update ends the request here, before any email goes out
    try:
        store.mark_donated(donor.email, now())
    except StoreUpdateFailed as e:
        logger.error("Profile update for %s failed: %s", mask_email(donor.email), e.reason)
        raise
    except Exception as e:
        logger.exception("Profile update for %s failed", mask_email(donor.email))
        raise StoreUpdateFailed(donor.email, str(e)) from e
    logger.info("Updated %s to donated (event %s)", mask_email(donor.email), event.get("id"))

    if notifier is None:
        logger.debug("No email provider configured, skipping thank-you for event %s", event.get("id"))
        return WebhookResult(200, "Success")

    try:
        notifier.send(
            donor.email,
            donation_thank_you_subject(donor.name),
            donation_thank_you_html(donor.name),
        )
        logger.info("Sent thank-you email to %s", mask_email(donor.email))
    except Exception as e:
        failures.record(NotificationFailed(donor.email, str(e)))

    return WebhookResult(200, "Success")
