"""
Exception handlers.

Every failure leaves the API in the same envelope as a success:

    {"success": false, "message": str, "error": {"code": str, "details": {...}}, "timestamp": str}

Module exceptions only pick a base class from shared.exceptions; the status
code comes from that class. Upstream failures never expose their cause to
the client: the message is replaced with a generic one plus a reference id
that appears in the server log next to the full traceback.
"""

import logging
import uuid
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import ExternalServiceError, PortalError
from shared.responses import ErrorDetail, ErrorEnvelope

logger = logging.getLogger(__name__)

UPSTREAM_MESSAGE = "An unexpected error occurred. Please try again later."

_STATUS_CODES = {
    400: "VALIDATION_ERROR",
    401: "AUTHENTICATION_ERROR",
    403: "AUTHORIZATION_ERROR",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def error_response(
    status_code: int,
    message: str,
    code: str,
    details: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(message=message, error=ErrorDetail(code=code, details=details or {}))
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope),
        headers=headers,
    )


def _upstream_response(request: Request, exc: Exception, service: str = "internal") -> JSONResponse:
    reference = uuid.uuid4().hex[:12]
    logger.error(
        "Upstream failure [%s] on %s %s (service=%s)",
        reference, request.method, request.url.path, service,
        exc_info=exc,
    )
    return error_response(500, UPSTREAM_MESSAGE, "UPSTREAM_ERROR", {"reference": reference})


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if isinstance(exc, ExternalServiceError):
        return _upstream_response(request, exc, exc.service)

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.message, exc.code, exc.details, headers)


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Map request validation failures to 400.

    Only field names, messages and error types are returned; submitted
    values are never echoed back.
    """
    errors = [
        {"field": _field_name(tuple(e.get("loc", ()))), "message": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    missing = [e["field"] for e in errors if e["type"] == "missing"]
    if missing and len(missing) == len(errors):
        message = f"Required fields missing: {', '.join(missing)}"
    elif errors:
        message = f"Invalid {errors[0]['field']}: {errors[0]['message']}"
    else:
        message = "Invalid request"
    return error_response(400, message, "VALIDATION_ERROR", {"errors": errors})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        return _upstream_response(request, exc)
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = f"Route not found: {request.method} {request.url.path}"
    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return error_response(exc.status_code, message, code, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _upstream_response(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on an application."""
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
