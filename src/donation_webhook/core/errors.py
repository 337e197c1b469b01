from __future__ import annotations


class WebhookError(Exception):
    """Terminal failure for one delivery. Rendered as a plain-text response."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class SignatureInvalid(WebhookError):
    status_code = 400

    def __init__(self, reason: str) -> None:
        super().__init__(f"Webhook Error: {reason}")
        self.reason = reason


class MissingField(WebhookError):
    status_code = 400

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing {field}")
        self.field = field


class StoreUpdateFailed(WebhookError):
    status_code = 500

    def __init__(self, email: str, reason: str) -> None:
        super().__init__("Failed to update user")
        self.email = email
        self.reason = reason


class NotificationFailed(Exception):
    """
    Thank-you email could not be sent.

    Never surfaces as a response: the profile update already committed.
    Handed to a FailureSink instead of being raised.
    """

    def __init__(self, email: str, reason: str) -> None:
        super().__init__(f"Notification to {email} failed: {reason}")
        self.email = email
        self.reason = reason
