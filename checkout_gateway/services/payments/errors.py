from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Base class for everything the checkout gateway raises on purpose."""

    kind: str = "unknown"

    def __init__(self, message: str = "", *, kind: Optional[str] = None):
        super().__init__(message or self.__class__.__name__)
        if kind:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


# =========================
# Pre-call errors (never reach the provider)
# =========================

class ConfigurationError(GatewayError):
    kind = "not_configured"


class CheckoutValidationError(GatewayError):
    kind = "invalid_request"


# =========================
# Provider call boundary
# =========================

class ProviderError(GatewayError):
    """Provider-side failure. The message is kept for logs, its shape is not stable."""

    kind = "provider_error"

    def __init__(self, message: str = "", *, kind: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message, kind=kind)
        self.status_code = status_code


class ProviderUnavailableError(ProviderError):
    kind = "provider_unavailable"


class ProviderAuthError(ProviderError):
    kind = "provider_auth"


class ProviderRequestError(ProviderError):
    kind = "provider_rejected_request"


# =========================
# Webhook
# =========================

class SignatureError(GatewayError):
    kind = "invalid_signature"


class PayloadError(GatewayError):
    kind = "malformed_payload"
