from __future__ import annotations

from typing import TYPE_CHECKING

from checkout_gateway.services.payments.dodo_provider import DodoPaymentsClient
from checkout_gateway.services.payments.provider import PaymentProviderClient
from checkout_gateway.services.payments.stripe_provider import StripeCheckoutClient

if TYPE_CHECKING:
    from checkout_gateway.infra.config import GatewayConfig


def get_payment_provider(config: "GatewayConfig") -> PaymentProviderClient:
    # credentials may still be missing here; the gateway validates before any call
    api_key = config.api_key or ""
    if config.payment_provider == "stripe":
        return StripeCheckoutClient(api_key=api_key)
    return DodoPaymentsClient(
        api_key=api_key,
        environment=config.environment,
        timeout=config.provider_timeout_sec,
    )
