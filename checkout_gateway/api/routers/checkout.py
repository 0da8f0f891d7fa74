import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from checkout_gateway.api.deps import get_checkout_gateway, get_config
from checkout_gateway.api.errors import error_response
from checkout_gateway.api.schemas.checkout import CheckoutSessionOut, ErrorOut, HealthOut
from checkout_gateway.infra.config import GatewayConfig
from checkout_gateway.services.payments import CheckoutGateway
from checkout_gateway.services.payments.checkout_builder import build_return_url
from checkout_gateway.services.payments.config_validator import is_placeholder
from checkout_gateway.services.payments.errors import CheckoutValidationError, ConfigurationError
from checkout_gateway.services.payments.models import CheckoutFailure

logger = logging.getLogger("uvicorn.error")

router = APIRouter()

_ERROR_RESPONSES = {400: {"model": ErrorOut}, 500: {"model": ErrorOut}}


def _configured(value: Optional[str]) -> bool:
    return bool(value) and not is_placeholder(value)


async def _create_checkout(request: Request, gateway: CheckoutGateway, config: GatewayConfig):
    host = request.headers.get("host") or request.url.netloc

    try:
        return_url = build_return_url(request.url.scheme, host, config.success_path)
        result = await gateway.create_checkout(return_url=return_url)
    except ConfigurationError as e:
        logger.warning("[checkout] refused, configuration problem: %s", e)
        return error_response(400, e.message, kind="not_configured", details=e.kind)
    except CheckoutValidationError as e:
        logger.warning("[checkout] refused, invalid request: %s", e)
        return error_response(400, e.message, kind="invalid_request", details=e.kind)

    if isinstance(result, CheckoutFailure):
        return error_response(
            500,
            "Failed to create checkout session",
            kind=result.error_kind.value,
            details=result.details or result.message,
        )

    return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))


@router.post("/api/create-checkout-session", response_model=CheckoutSessionOut, responses=_ERROR_RESPONSES)
async def api_create_checkout_session(
    request: Request,
    gateway: CheckoutGateway = Depends(get_checkout_gateway),
    config: GatewayConfig = Depends(get_config),
):
    return await _create_checkout(request, gateway, config)


# later front-ends post here; same contract
@router.post("/api/create-payment", response_model=CheckoutSessionOut, responses=_ERROR_RESPONSES)
async def api_create_payment(
    request: Request,
    gateway: CheckoutGateway = Depends(get_checkout_gateway),
    config: GatewayConfig = Depends(get_config),
):
    return await _create_checkout(request, gateway, config)


def render_success_page(payment_id: Optional[str] = None, status: Optional[str] = None) -> str:
    def esc(x): return html.escape(str(x), quote=True)

    rows = ""
    if payment_id:
        rows += f"<p><strong>Payment ID:</strong> {esc(payment_id)}</p>\n"
    if status:
        rows += f"<p><strong>Status:</strong> {esc(status)}</p>\n"

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Payment Success</title>
  <style>
    body {{ font-family: Arial, sans-serif; text-align: center; padding: 50px;
           background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); margin: 0;
           min-height: 100vh; display: flex; align-items: center; justify-content: center; }}
    .container {{ background: white; padding: 40px; border-radius: 12px;
                 box-shadow: 0 10px 30px rgba(0, 0, 0, 0.2); max-width: 500px; }}
    .success {{ color: #28a745; }}
    .back-link {{ display: inline-block; margin-top: 20px; padding: 10px 20px;
                 background: #667eea; color: white; text-decoration: none; border-radius: 6px; }}
  </style>
</head>
<body>
  <div class="container">
    <h1 class="success">Payment Successful!</h1>
    <p>Thank you for your payment.</p>
    {rows}
    <a href="/" class="back-link">&larr; Back to Home</a>
  </div>
</body>
</html>"""


@router.get("/success", response_class=HTMLResponse)
async def success_page(payment_id: Optional[str] = None, status: Optional[str] = None):
    return HTMLResponse(render_success_page(payment_id, status))


@router.get("/health", response_model=HealthOut)
async def health(config: GatewayConfig = Depends(get_config)):
    return HealthOut(
        provider=config.payment_provider,
        environment=config.environment,
        api_key_configured=_configured(config.api_key),
        product_configured=_configured(config.product_id),
        webhook_configured=_configured(config.webhook_secret),
    )
