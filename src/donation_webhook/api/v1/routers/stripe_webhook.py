import logging

from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from donation_webhook.api.deps import (
    get_failure_sink,
    get_notifier,
    get_settings,
    get_user_store,
)
from donation_webhook.core.config import Settings
from donation_webhook.core.errors import SignatureInvalid, WebhookError
from donation_webhook.integrations.stripe.webhook import construct_event
from donation_webhook.services.donations import handle_stripe_event
from donation_webhook.services.ports import FailureSink, Notifier, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stripe"])


@router.post("/stripe", response_class=PlainTextResponse)
async def stripe_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_user_store),
    notifier: Notifier | None = Depends(get_notifier),
    failures: FailureSink = Depends(get_failure_sink),
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
):
    # Raw bytes: the signature covers the body exactly as sent
    payload = await request.body()

    # 1) Verify + parse
    try:
        event = construct_event(
            payload,
            stripe_signature,
            settings.stripe_webhook_secret.get_secret_value(),
            tolerance=settings.stripe_webhook_tolerance_sec,
        )
    except SignatureInvalid as e:
        logger.warning("Stripe signature verification failed: %s", e.reason)
        return PlainTextResponse(e.detail, status_code=e.status_code)

    # 2) Apply (store + email are blocking HTTP calls)
    try:
        result = await run_in_threadpool(
            handle_stripe_event,
            event,
            store=store,
            notifier=notifier,
            failures=failures,
        )
    except WebhookError as e:
        return PlainTextResponse(e.detail, status_code=e.status_code)

    return PlainTextResponse(result.body, status_code=result.status_code)
