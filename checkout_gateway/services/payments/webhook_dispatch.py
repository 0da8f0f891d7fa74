import logging
from typing import Callable, Mapping, Optional

from checkout_gateway.services.payments.models import WebhookEvent, WebhookEventKind

logger = logging.getLogger("uvicorn.error")

WebhookHandler = Callable[[WebhookEvent], None]


# Handlers only log. They may see the same event more than once (provider redelivery).
def _on_payment_succeeded(event: WebhookEvent) -> None:
    logger.info("[webhook] payment succeeded: %s", event.payment_id)


def _on_payment_failed(event: WebhookEvent) -> None:
    logger.warning("[webhook] payment failed: %s", event.payment_id)


def _on_subscription_created(event: WebhookEvent) -> None:
    logger.info("[webhook] subscription created (payment=%s)", event.payment_id)


def _on_subscription_cancelled(event: WebhookEvent) -> None:
    logger.info("[webhook] subscription cancelled (payment=%s)", event.payment_id)


def _on_unknown(event: WebhookEvent) -> None:
    logger.info("[webhook] unhandled event type: %s", event.event_type or "<empty>")


WEBHOOK_HANDLERS: dict[WebhookEventKind, WebhookHandler] = {
    WebhookEventKind.PAYMENT_SUCCEEDED: _on_payment_succeeded,
    WebhookEventKind.PAYMENT_FAILED: _on_payment_failed,
    WebhookEventKind.SUBSCRIPTION_CREATED: _on_subscription_created,
    WebhookEventKind.SUBSCRIPTION_CANCELLED: _on_subscription_cancelled,
    WebhookEventKind.UNKNOWN: _on_unknown,
}


def dispatch_webhook_event(
    event: WebhookEvent,
    handlers: Optional[Mapping[WebhookEventKind, WebhookHandler]] = None,
) -> None:
    """Run exactly one handler for the event; kinds without a handler fall back to UNKNOWN."""
    table = WEBHOOK_HANDLERS if handlers is None else handlers
    handler = table.get(event.kind) or table.get(WebhookEventKind.UNKNOWN) or _on_unknown
    handler(event)
