from typing import Optional

from pydantic import BaseModel, Field


class CheckoutSessionOut(BaseModel):
    sessionId: str = Field(..., description="Provider checkout session id")
    checkoutUrl: str = Field(..., description="Hosted checkout page to redirect the browser to")


class ErrorOut(BaseModel):
    """Body of every non-2xx answer from the gateway."""

    error: str
    kind: str = "unknown"
    details: Optional[str] = None
    timestamp: str


class WebhookAckOut(BaseModel):
    received: bool = True


class HealthOut(BaseModel):
    ok: bool = True
    provider: str
    environment: str
    api_key_configured: bool
    product_configured: bool
    webhook_configured: bool
