import asyncio
from typing import Any, Optional

from checkout_gateway.services.payments.errors import (
    CheckoutValidationError,
    ConfigurationError,
    ProviderAuthError,
    ProviderRequestError,
    ProviderUnavailableError,
)
from checkout_gateway.services.payments.models import (
    CheckoutErrorKind,
    CheckoutFailure,
    CheckoutResult,
    CheckoutSuccess,
)

_ERROR_MESSAGES = {
    CheckoutErrorKind.NOT_CONFIGURED: "Payment provider not configured",
    CheckoutErrorKind.PROVIDER_UNAVAILABLE: "Payment provider unavailable",
    CheckoutErrorKind.INVALID_REQUEST: "Payment provider rejected the request",
    CheckoutErrorKind.UNKNOWN: "Failed to create checkout session",
}


def _first_str(result: Any, *keys: str) -> Optional[str]:
    for key in keys:
        if isinstance(result, dict):
            value = result.get(key)
        else:
            value = getattr(result, key, None)
        if isinstance(value, str) and value.strip():
            return value
    return None


def normalize_provider_result(result: Any) -> CheckoutResult:
    """Success only when both session id and checkout url are present; values are passed through untouched."""
    session_id = _first_str(result, "session_id", "sessionId")
    checkout_url = _first_str(result, "checkout_url", "checkoutUrl")

    if session_id is None or checkout_url is None:
        missing = [name for name, v in (("session_id", session_id), ("checkout_url", checkout_url)) if v is None]
        return CheckoutFailure(
            error_kind=CheckoutErrorKind.INCOMPLETE_PROVIDER_RESPONSE,
            message="Incomplete response from payment provider",
            details=f"missing: {', '.join(missing)}",
        )

    return CheckoutSuccess(session_id=session_id, checkout_url=checkout_url)


def classify_error(exc: BaseException) -> CheckoutErrorKind:
    if isinstance(exc, (ConfigurationError, ProviderAuthError)):
        return CheckoutErrorKind.NOT_CONFIGURED
    if isinstance(exc, (ProviderUnavailableError, asyncio.TimeoutError, TimeoutError)):
        return CheckoutErrorKind.PROVIDER_UNAVAILABLE
    if isinstance(exc, (ProviderRequestError, CheckoutValidationError)):
        return CheckoutErrorKind.INVALID_REQUEST
    return CheckoutErrorKind.UNKNOWN


def normalize_provider_error(exc: BaseException) -> CheckoutFailure:
    kind = classify_error(exc)
    return CheckoutFailure(
        error_kind=kind,
        message=_ERROR_MESSAGES[kind],
        details=str(exc) or exc.__class__.__name__,
    )
