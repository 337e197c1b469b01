import json
from typing import Any

import stripe

from donation_webhook.core.errors import SignatureInvalid


def construct_event(
    payload: bytes,
    signature: str | None,
    secret: str,
    tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
) -> dict[str, Any]:
    """
    Verify a Stripe delivery and parse it into a plain dict.

    Verification is Stripe's own routine (t=<ts>,v1=<sig>[,v1=...] header,
    HMAC-SHA256 over "<ts>.<body>", timestamp tolerance). The body is only
    decoded as JSON after it verified. Every failure raises SignatureInvalid.
    """
    if tolerance <= 0:
        raise ValueError("tolerance must be greater than 0")
    if not signature:
        raise SignatureInvalid("Missing Stripe-Signature header")

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        raise SignatureInvalid("Payload is not valid UTF-8") from None

    try:
        stripe.WebhookSignature.verify_header(text, signature, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        raise SignatureInvalid(e.user_message or str(e)) from e

    try:
        event = json.loads(text)
    except ValueError as e:
        raise SignatureInvalid(f"Invalid payload: {e}") from e

    if not isinstance(event, dict):
        raise SignatureInvalid("Invalid payload: expected a JSON object")

    return event
