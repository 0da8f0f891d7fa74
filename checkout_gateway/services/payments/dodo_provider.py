from typing import Any

import requests
from fastapi.concurrency import run_in_threadpool

from checkout_gateway.services.payments.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderUnavailableError,
)
from checkout_gateway.services.payments.models import CheckoutRequest
from checkout_gateway.services.payments.provider import PaymentProviderClient

DODO_BASE_URLS = {
    "test_mode": "https://test.dodopayments.com",
    "live_mode": "https://live.dodopayments.com",
}


def _truncate(body: str, limit: int = 800) -> str:
    body = body or ""
    if len(body) > limit:
        return body[:limit] + "...(truncated)"
    return body


class DodoPaymentsClient(PaymentProviderClient):
    """Dodo Payments checkout sessions over plain HTTPS (one attempt, bounded timeout)."""

    name = "dodo"

    def __init__(self, api_key: str, environment: str = "test_mode", timeout: float = 15.0, session=None):
        if environment not in DODO_BASE_URLS:
            raise ValueError(f"Unsupported Dodo environment: {environment}")
        self.api_key = api_key
        self.environment = environment
        self.base_url = DODO_BASE_URLS[environment]
        self.timeout = timeout
        self._http = session or requests

    def _headers(self, idempotency_key: str) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Idempotency-Key": idempotency_key,
        }

    def _post_checkout(self, payload: dict, idempotency_key: str) -> dict[str, Any]:
        url = f"{self.base_url}/checkouts"
        try:
            r = self._http.post(url, headers=self._headers(idempotency_key), json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise ProviderUnavailableError(f"Dodo Payments timed out after {self.timeout}s: {e}")
        except requests.RequestException as e:
            raise ProviderUnavailableError(f"Dodo Payments unreachable: {e}")

        if r.status_code >= 300:
            detail = f"Dodo Payments POST /checkouts failed: {r.status_code} {r.reason} body={_truncate(r.text)}"
            if r.status_code in (401, 403):
                raise ProviderAuthError(detail, status_code=r.status_code)
            if r.status_code >= 500 or r.status_code == 429:
                raise ProviderUnavailableError(detail, status_code=r.status_code)
            raise ProviderRequestError(detail, status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError(
                f"Dodo Payments JSON decode failed: {e} (status={r.status_code}) body={_truncate(r.text)}",
                status_code=r.status_code,
            )
        if not isinstance(data, dict):
            raise ProviderError(f"Dodo Payments returned {type(data).__name__}, expected an object")
        return data

    async def create_checkout_session(self, request: CheckoutRequest) -> dict:
        return await run_in_threadpool(self._post_checkout, request.to_provider_payload(), request.idempotency_key)
