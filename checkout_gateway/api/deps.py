from fastapi import Request

from checkout_gateway.infra.config import GatewayConfig
from checkout_gateway.services.payments import CheckoutGateway, WebhookVerifier


# Everything hangs off app.state (set once in create_app).
# Tests swap pieces through app.dependency_overrides.

def get_config(request: Request) -> GatewayConfig:
    return request.app.state.config


def get_checkout_gateway(request: Request) -> CheckoutGateway:
    return request.app.state.checkout_gateway


def get_webhook_verifier(request: Request) -> WebhookVerifier:
    return request.app.state.webhook_verifier
