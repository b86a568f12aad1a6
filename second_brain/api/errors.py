"""
Exception handlers.

Renders application exceptions as {"error": {"kind", "message", "details"}}
with a status code per error kind. Details are hidden in production.

Dependencies: fastapi, second_brain.core.exceptions
System role: Uniform API error responses
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from second_brain.core.exceptions import QuotaExceeded, RateLimitExceeded, SecondBrainException

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "authorization_error": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "embedding_failure": status.HTTP_502_BAD_GATEWAY,
    "generation_failure": status.HTTP_502_BAD_GATEWAY,
    "provider_error": status.HTTP_502_BAD_GATEWAY,
    "malformed_provider_output": status.HTTP_502_BAD_GATEWAY,
    "quota_exceeded": status.HTTP_429_TOO_MANY_REQUESTS,
    "rate_limited": status.HTTP_429_TOO_MANY_REQUESTS,
}

KIND_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_403_FORBIDDEN: "authorization_error",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_429_TOO_MANY_REQUESTS: "rate_limited",
}


def error_payload(kind: str, message: str, details: dict | None, expose_details: bool) -> dict:
    body = {"kind": kind, "message": message}
    if expose_details and details:
        body["details"] = jsonable_encoder(details)
    return {"error": body}


def register_exception_handlers(app: FastAPI, expose_details: bool = True) -> None:
    """
    Install exception handlers on app.

    Args:
        app: FastAPI application
        expose_details: Include error details in responses (off in production)
    """

    @app.exception_handler(SecondBrainException)
    async def handle_app_error(request: Request, exc: SecondBrainException) -> JSONResponse:
        status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
        headers = {}
        if isinstance(exc, (QuotaExceeded, RateLimitExceeded)) and exc.retry_after is not None:
            headers["Retry-After"] = str(max(1, math.ceil(exc.retry_after)))

        log = logger.warning if status_code < 500 else logger.error
        log(
            f"{exc.kind}: {exc.message}",
            extra={"path": request.url.path, "kind": exc.kind},
        )
        return JSONResponse(
            status_code=status_code,
            content=error_payload(exc.kind, exc.message, exc.details, expose_details),
            headers=headers or None,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        kind = KIND_BY_STATUS.get(exc.status_code, "http_error")
        logger.warning(f"{kind}: {exc.detail}", extra={"path": request.url.path, "status_code": exc.status_code})
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(kind, str(exc.detail), None, expose_details),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Request validation failed", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload(
                "validation_error",
                "Invalid request",
                {"errors": [
                    {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                    for err in exc.errors()
                ]},
                expose_details,
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload(
                "internal_error",
                "Internal server error",
                {"error": str(exc)},
                expose_details,
            ),
        )
