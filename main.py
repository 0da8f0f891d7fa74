# main.py: hosted checkout gateway (FastAPI)
import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from checkout_gateway.api.errors import error_response
from checkout_gateway.api.routers import checkout as checkout_router
from checkout_gateway.api.routers import webhooks as webhooks_router
from checkout_gateway.infra.config import GatewayConfig, load_gateway_config
from checkout_gateway.services.payments import (
    CheckoutGateway,
    PaymentProviderClient,
    WebhookVerifier,
    get_payment_provider,
)
from checkout_gateway.services.payments.config_validator import is_placeholder

logger = logging.getLogger("uvicorn.error")


def create_app(
    config: Optional[GatewayConfig] = None,
    provider: Optional[PaymentProviderClient] = None,
) -> FastAPI:
    """
    Build the app with its collaborators wired explicitly:
    - config: read once from env unless given
    - provider: real client from config unless given (tests pass a fake)
    """
    config = config or load_gateway_config()
    provider = provider or get_payment_provider(config)

    app = FastAPI(
        title="Checkout Gateway API",
        description="Hosted checkout session creation + signed payment webhooks",
        version="1.0.0",
    )

    app.state.config = config
    app.state.checkout_gateway = CheckoutGateway(config=config, provider=provider)
    app.state.webhook_verifier = WebhookVerifier(config.webhook_secret)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    # no HTML error pages, ever
    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error", kind="unknown", details=str(exc) or exc.__class__.__name__)

    app.include_router(checkout_router.router)
    app.include_router(webhooks_router.router)

    # public/index.html + assets; mounted last so API routes win
    if os.path.isdir(config.public_dir):
        app.mount("/", StaticFiles(directory=config.public_dir, html=True), name="public")

    logger.info("Server starting with configuration:")
    logger.info("Provider: %s (%s)", provider.name, config.environment)
    logger.info("Product ID: %s", config.product_id or "<not set>")
    logger.info("API Key configured: %s", "Yes" if config.api_key and not is_placeholder(config.api_key) else "No")
    logger.info("Webhook secret configured: %s", "Yes" if config.webhook_secret and not is_placeholder(config.webhook_secret) else "No")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=app.state.config.port, reload=False)
