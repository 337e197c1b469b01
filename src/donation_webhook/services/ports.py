from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Protocol

from donation_webhook.core.errors import NotificationFailed
from donation_webhook.core.logging import mask_email

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    def mark_donated(self, email: str, donated_at: datetime) -> None:
        """Set paying_status/donation_date on the profile. Raises StoreUpdateFailed."""


class Notifier(Protocol):
    def send(self, to: str, subject: str, html: str) -> Any: ...


class FailureSink(Protocol):
    def record(self, error: NotificationFailed) -> None: ...


class LoggingFailureSink:
    def record(self, error: NotificationFailed) -> None:
        logger.error("Confirmation email to %s failed: %s", mask_email(error.email), error.reason)
