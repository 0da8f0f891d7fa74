from typing import Any

import stripe
from fastapi.concurrency import run_in_threadpool

from checkout_gateway.services.payments.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderUnavailableError,
)
from checkout_gateway.services.payments.models import CheckoutRequest
from checkout_gateway.services.payments.provider import PaymentProviderClient


class StripeCheckoutClient(PaymentProviderClient):
    """
    Stripe-backed alternative (PAYMENT_PROVIDER=stripe).
    - PRODUCT_ID is used as the Stripe price id
    - return_url becomes success_url and cancel_url
    - the api key is passed per call, the global stripe.api_key is never touched
    - no timeout of its own: the gateway bounds the call with asyncio.wait_for
    - one Session.create per checkout; stripe.max_network_retries is left at its global default (0)
    """

    name = "stripe"

    def __init__(self, api_key: str):
        self.api_key = api_key

    def _session_create_payload(self, request: CheckoutRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "mode": "payment",
            "line_items": [{"price": item.product_id, "quantity": item.quantity} for item in request.product_cart],
            "success_url": request.return_url,
            "cancel_url": request.return_url,
            "metadata": dict(request.metadata),
        }
        if request.customer is not None:
            payload["customer_email"] = request.customer.email
        return payload

    def _create(self, request: CheckoutRequest) -> dict[str, Any]:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                idempotency_key=request.idempotency_key,
                **self._session_create_payload(request),
            )
        except stripe.AuthenticationError as e:
            raise ProviderAuthError(f"Stripe authentication failed: {e}", status_code=getattr(e, "http_status", None))
        except stripe.InvalidRequestError as e:
            raise ProviderRequestError(f"Stripe rejected the request: {e}", status_code=getattr(e, "http_status", None))
        except (stripe.APIConnectionError, stripe.RateLimitError) as e:
            raise ProviderUnavailableError(f"Stripe unavailable: {e}", status_code=getattr(e, "http_status", None))
        except stripe.StripeError as e:
            raise ProviderError(f"Stripe error: {e}", status_code=getattr(e, "http_status", None))

        return {
            "session_id": session.get("id") if session else None,
            "checkout_url": session.get("url") if session else None,
        }

    async def create_checkout_session(self, request: CheckoutRequest) -> dict:
        return await run_in_threadpool(self._create, request)
