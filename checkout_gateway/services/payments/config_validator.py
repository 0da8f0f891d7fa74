from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from checkout_gateway.services.payments.errors import ConfigurationError

if TYPE_CHECKING:
    from checkout_gateway.infra.config import GatewayConfig


# Unmodified template values from .env.example; treated exactly like "missing".
PLACEHOLDER_VALUES = frozenset(
    {
        "your-api-key-here",
        "your-product-id",
        "your-webhook-secret",
    }
)


def is_placeholder(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in PLACEHOLDER_VALUES


def _require(value: Optional[str], *, missing_kind: str, message: str) -> None:
    if not (value or "").strip():
        raise ConfigurationError(message, kind=missing_kind)
    if is_placeholder(value):
        raise ConfigurationError(message, kind="placeholder_value")


def validate_checkout_config(config: "GatewayConfig") -> None:
    """Raise ConfigurationError unless credentials and product are usable. No side effects."""
    _require(
        config.api_key,
        missing_kind="missing_api_key",
        message="API key not configured. Please set DODO_PAYMENTS_API_KEY in your .env file",
    )
    _require(
        config.product_id,
        missing_kind="missing_product_id",
        message="Product ID not configured. Please set PRODUCT_ID in your .env file",
    )


def require_webhook_secret(secret: Optional[str]) -> str:
    """Stripped webhook secret; empty or placeholder raises missing_webhook_secret."""
    secret = (secret or "").strip()
    if not secret or is_placeholder(secret):
        raise ConfigurationError(
            "Webhook secret not configured. Please set DODO_PAYMENTS_WEBHOOK_SECRET in your .env file",
            kind="missing_webhook_secret",
        )
    return secret
