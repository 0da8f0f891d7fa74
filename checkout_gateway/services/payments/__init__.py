from checkout_gateway.services.payments.factory import get_payment_provider
from checkout_gateway.services.payments.gateway import CheckoutGateway
from checkout_gateway.services.payments.provider import PaymentProviderClient
from checkout_gateway.services.payments.webhook_dispatch import dispatch_webhook_event
from checkout_gateway.services.payments.webhook_verifier import WebhookVerifier

__all__ = [
    "CheckoutGateway",
    "PaymentProviderClient",
    "WebhookVerifier",
    "dispatch_webhook_event",
    "get_payment_provider",
]
