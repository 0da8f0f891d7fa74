from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlsplit

from checkout_gateway.services.payments.errors import CheckoutValidationError
from checkout_gateway.services.payments.models import (
    CheckoutRequest,
    Customer,
    ProductCartItem,
    ProductCatalogEntry,
)

if TYPE_CHECKING:
    from checkout_gateway.infra.config import GatewayConfig


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _coerce_quantity(raw: Any) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 1
    # bool is an int subclass; True must not silently become 1
    if isinstance(raw, bool):
        raise CheckoutValidationError(f"Invalid quantity: {raw!r}", kind="invalid_quantity")
    if isinstance(raw, int):
        qty = raw
    # isdigit alone lets through unicode digits ("²") that int() refuses
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdigit():
        qty = int(raw.strip())
    else:
        raise CheckoutValidationError(f"Invalid quantity: {raw!r}", kind="invalid_quantity")
    if qty <= 0:
        raise CheckoutValidationError(f"Quantity must be a positive integer, got {qty}", kind="invalid_quantity")
    return qty


def _complete_customer(customer: Optional[Customer]) -> Optional[Customer]:
    """All-or-nothing: a customer with only one of name/email counts as no customer."""
    if customer is None:
        return None
    name = (customer.name or "").strip()
    email = (customer.email or "").strip()
    if not name or not email:
        return None
    return Customer(name=name, email=email)


_HOST_FORBIDDEN = set("/?#@\\")


def _checked_host(host: str) -> str:
    """Accept only hostname[:port]; anything that could add path, query, fragment or userinfo is refused."""
    host = (host or "").strip().rstrip("/")
    if not host or any(c in _HOST_FORBIDDEN or c.isspace() for c in host):
        raise CheckoutValidationError(f"Invalid host: {host!r}", kind="invalid_host")
    try:
        parts = urlsplit(f"//{host}")
        parts.port
    except ValueError:
        raise CheckoutValidationError(f"Invalid host port: {host!r}", kind="invalid_host")
    if parts.netloc != host or not parts.hostname:
        raise CheckoutValidationError(f"Invalid host: {host!r}", kind="invalid_host")
    return host


def build_return_url(scheme: str, host: str, success_path: str = "/success") -> str:
    """
    Return URL = inbound scheme + host + fixed success path.
    Nothing else from the request (query, body) is allowed to shape it.
    """
    scheme = (scheme or "http").strip().lower()
    if scheme not in ("http", "https"):
        scheme = "http"
    host = _checked_host(host)
    path = success_path if success_path.startswith("/") else f"/{success_path}"
    return f"{scheme}://{host}{path}"


def catalog_entry_from_config(config: "GatewayConfig") -> ProductCatalogEntry:
    return ProductCatalogEntry(product_id=(config.product_id or "").strip(), quantity=config.product_quantity)


def customer_from_config(config: "GatewayConfig") -> Optional[Customer]:
    return _complete_customer(Customer(name=config.customer_name, email=config.customer_email))


def build_checkout_request(
    config: "GatewayConfig",
    product: ProductCatalogEntry,
    customer: Optional[Customer],
    return_url: str,
) -> CheckoutRequest:
    quantity = _coerce_quantity(product.quantity)
    product_id = product.product_id.strip()

    # timestamp is taken here (just before the provider call), not at request receipt
    metadata = {
        "source": config.source_tag,
        "timestamp": utc_now_iso(),
        "product_id": product_id,
        "quantity": str(quantity),
    }

    return CheckoutRequest(
        product_cart=[ProductCartItem(product_id=product_id, quantity=quantity)],
        customer=_complete_customer(customer),
        return_url=return_url,
        metadata=metadata,
        idempotency_key=f"checkout:{product_id}:{uuid.uuid4().hex}",
    )
