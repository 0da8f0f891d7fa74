from typing import Optional

from fastapi.responses import JSONResponse

from checkout_gateway.api.schemas.checkout import ErrorOut
from checkout_gateway.services.payments.checkout_builder import utc_now_iso


def error_response(status_code: int, error: str, kind: str = "unknown", details: Optional[str] = None) -> JSONResponse:
    body = ErrorOut(error=error, kind=kind, details=details, timestamp=utc_now_iso())
    return JSONResponse(status_code=status_code, content=body.model_dump())
