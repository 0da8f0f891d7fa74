from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from checkout_gateway.services.payments.checkout_builder import (
    build_checkout_request,
    catalog_entry_from_config,
    customer_from_config,
)
from checkout_gateway.services.payments.config_validator import validate_checkout_config
from checkout_gateway.services.payments.models import (
    CheckoutFailure,
    CheckoutResult,
    Customer,
    ProductCatalogEntry,
)
from checkout_gateway.services.payments.normalizer import (
    normalize_provider_error,
    normalize_provider_result,
)
from checkout_gateway.services.payments.provider import PaymentProviderClient

if TYPE_CHECKING:
    from checkout_gateway.infra.config import GatewayConfig

logger = logging.getLogger("uvicorn.error")


class CheckoutGateway:
    """
    Checkout orchestration:
    validate config -> build request -> provider call (bounded, single attempt) -> normalize

    ConfigurationError / CheckoutValidationError propagate to the caller untouched:
    they are detected before the provider is contacted.
    A failed create-session is never retried here; without a provider-side
    idempotency guarantee a retry can open a duplicate session.
    """

    def __init__(self, config: "GatewayConfig", provider: PaymentProviderClient):
        self.config = config
        self.provider = provider

    async def create_checkout(
        self,
        return_url: str,
        customer: Optional[Customer] = None,
        product: Optional[ProductCatalogEntry] = None,
    ) -> CheckoutResult:
        validate_checkout_config(self.config)

        if product is None:
            product = catalog_entry_from_config(self.config)
        if customer is None:
            customer = customer_from_config(self.config)

        request = build_checkout_request(self.config, product, customer, return_url)
        logger.info(
            "[checkout] creating session provider=%s product=%s quantity=%s customer=%s",
            self.provider.name,
            request.product_cart[0].product_id,
            request.product_cart[0].quantity,
            "yes" if request.customer else "no",
        )

        try:
            raw = await asyncio.wait_for(
                self.provider.create_checkout_session(request),
                timeout=self.config.provider_timeout_sec,
            )
        except asyncio.TimeoutError as exc:
            logger.warning("[checkout] provider timed out after %ss", self.config.provider_timeout_sec)
            return normalize_provider_error(exc)
        except Exception as exc:
            logger.error("[checkout] provider call failed: %s", exc)
            return normalize_provider_error(exc)

        result = normalize_provider_result(raw)
        if isinstance(result, CheckoutFailure):
            logger.error("[checkout] %s (%s)", result.message, result.details)
        else:
            logger.info("[checkout] session created: %s", result.session_id)
        return result
