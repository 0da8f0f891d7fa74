import hashlib
import hmac
import json
from typing import Any, Mapping, Optional

from checkout_gateway.services.payments.config_validator import require_webhook_secret
from checkout_gateway.services.payments.errors import (
    PayloadError,
    SignatureError,
)
from checkout_gateway.services.payments.models import WebhookEvent, WebhookEventKind

SIGNATURE_HEADERS = ("dodo-signature", "x-dodo-signature")
SIGNATURE_PREFIX = "sha256="

_EVENT_KINDS = {
    "payment.succeeded": WebhookEventKind.PAYMENT_SUCCEEDED,
    "payment.failed": WebhookEventKind.PAYMENT_FAILED,
    "subscription.created": WebhookEventKind.SUBSCRIPTION_CREATED,
    "subscription.cancelled": WebhookEventKind.SUBSCRIPTION_CANCELLED,
    "subscription.canceled": WebhookEventKind.SUBSCRIPTION_CANCELLED,
}


def compute_signature(secret: str, raw_body: bytes) -> str:
    """Hex HMAC-SHA256 of the raw body, no prefix."""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # starlette Headers is case-insensitive already; plain dicts are not
    value = headers.get(name)
    if value is None:
        for key, v in headers.items():
            if key.lower() == name:
                value = v
                break
    return value


def extract_signature(headers: Mapping[str, str]) -> Optional[str]:
    for name in SIGNATURE_HEADERS:
        value = _get_header(headers, name)
        if value and value.strip():
            return value
    return None


def event_kind_for(event_type: str) -> WebhookEventKind:
    return _EVENT_KINDS.get((event_type or "").strip().lower(), WebhookEventKind.UNKNOWN)


def _payment_id(payload: dict[str, Any]) -> Optional[str]:
    data = payload.get("data")
    candidates = []
    if isinstance(data, dict):
        candidates.append(data.get("payment_id"))
    candidates.append(payload.get("payment_id"))
    for c in candidates:
        if c is not None and str(c).strip():
            return str(c).strip()
    return None


class WebhookVerifier:
    """
    Verify an inbound provider notification and turn it into a WebhookEvent.

    Must be fed the body bytes exactly as received. Anything that parses and
    re-serializes the JSON first changes the bytes and breaks the signature.
    """

    def __init__(self, secret: Optional[str]):
        self.secret = (secret or "").strip()

    def _require_secret(self) -> str:
        return require_webhook_secret(self.secret)

    def check_signature(self, headers: Mapping[str, str], raw_body: bytes) -> None:
        secret = self._require_secret()

        supplied = extract_signature(headers)
        if supplied is None:
            raise SignatureError("Missing webhook signature", kind="missing_signature")

        supplied = supplied.strip()
        if supplied.startswith(SIGNATURE_PREFIX):
            supplied = supplied[len(SIGNATURE_PREFIX):]

        expected = compute_signature(secret, raw_body)
        # compare bytes so non-ascii garbage in the header cannot raise TypeError
        if not hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8")):
            raise SignatureError("Invalid webhook signature", kind="invalid_signature")

    def verify(self, headers: Mapping[str, str], raw_body: bytes) -> WebhookEvent:
        self.check_signature(headers, raw_body)

        # parsing only starts once the signature is accepted
        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PayloadError(f"Invalid JSON payload: {exc}", kind="malformed_payload") from exc
        if not isinstance(payload, dict):
            raise PayloadError("Webhook payload must be a JSON object", kind="malformed_payload")

        event_type = str(payload.get("type") or payload.get("event_type") or "").strip()
        return WebhookEvent(
            kind=event_kind_for(event_type),
            event_type=event_type,
            payment_id=_payment_id(payload),
            raw_payload=raw_body,
        )
