from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ProductCatalogEntry(BaseModel):
    product_id: str
    # raw value (env string / int / None); the builder owns the coercion rules
    quantity: Any = None


class Customer(BaseModel):
    name: str = ""
    email: str = ""


class ProductCartItem(BaseModel):
    product_id: str
    quantity: int


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_cart: list[ProductCartItem]
    customer: Optional[Customer] = None
    return_url: str
    metadata: dict[str, str]
    idempotency_key: str

    def to_provider_payload(self) -> dict[str, Any]:
        """
        Wire body for the provider's create-checkout call.
        - customer is left out entirely when absent, the hosted page collects it
        - idempotency_key travels as a header / SDK option, not in the body
        """
        payload: dict[str, Any] = {
            "product_cart": [item.model_dump() for item in self.product_cart],
            "return_url": self.return_url,
            "metadata": dict(self.metadata),
        }
        if self.customer is not None:
            payload["customer"] = {"email": self.customer.email, "name": self.customer.name}
        return payload


class CheckoutErrorKind(str, Enum):
    NOT_CONFIGURED = "not_configured"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    INVALID_REQUEST = "invalid_request"
    INCOMPLETE_PROVIDER_RESPONSE = "incomplete_provider_response"
    UNKNOWN = "unknown"


class CheckoutSuccess(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    checkout_url: str = Field(..., alias="checkoutUrl")


class CheckoutFailure(BaseModel):
    error_kind: CheckoutErrorKind
    message: str
    details: Optional[str] = None


CheckoutResult = Union[CheckoutSuccess, CheckoutFailure]


class WebhookEventKind(str, Enum):
    PAYMENT_SUCCEEDED = "payment.succeeded"
    PAYMENT_FAILED = "payment.failed"
    SUBSCRIPTION_CREATED = "subscription.created"
    SUBSCRIPTION_CANCELLED = "subscription.cancelled"
    UNKNOWN = "unknown"


class WebhookEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: WebhookEventKind
    event_type: str
    payment_id: Optional[str] = None
    raw_payload: bytes
