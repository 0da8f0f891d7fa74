import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from checkout_gateway.api.deps import get_webhook_verifier
from checkout_gateway.api.errors import error_response
from checkout_gateway.api.schemas.checkout import ErrorOut, WebhookAckOut
from checkout_gateway.services.payments import WebhookVerifier, dispatch_webhook_event
from checkout_gateway.services.payments.errors import ConfigurationError, PayloadError, SignatureError

logger = logging.getLogger("uvicorn.error")

router = APIRouter()


@router.post(
    "/api/webhook",
    response_model=WebhookAckOut,
    responses={400: {"model": ErrorOut}, 401: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def api_webhook(request: Request, verifier: WebhookVerifier = Depends(get_webhook_verifier)):
    # raw bytes only: request.json() here would defeat the signature check
    raw_body = await request.body()

    try:
        event = verifier.verify(request.headers, raw_body)
    except ConfigurationError as e:
        logger.error("[webhook] %s", e)
        return error_response(500, "Webhook secret not configured", kind=e.kind)
    except SignatureError as e:
        client_host = request.client.host if request.client else "?"
        logger.warning("[webhook] rejected (%s) from %s", e.kind, client_host)
        return error_response(401, e.message, kind=e.kind)
    except PayloadError as e:
        logger.warning("[webhook] malformed payload: %s", e)
        return error_response(400, "Invalid webhook payload", kind=e.kind, details=e.message)

    dispatch_webhook_event(event)
    return JSONResponse(status_code=200, content=WebhookAckOut().model_dump())
