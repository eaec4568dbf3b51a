"""
Translation of raised errors into the API's JSON error body.

Every failure leaves the service as::

    {"error": {"type": ..., "message": ..., "statusCode": ..., "errorCode": ...}}

with ``errorCode`` present only when the error carries a provider code.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .constants import REQUEST_ID_HEADER
from .errors import StorefrontError

logger = logging.getLogger(__name__)


def status_for(exc: Exception) -> int:
    if isinstance(exc, StorefrontError):
        return exc.status_code
    if isinstance(exc, RequestValidationError):
        return 400
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code
    # Request bodies are checked by FastAPI; a pydantic failure here means stored
    # data did not match its model.
    if isinstance(exc, PydanticValidationError):
        return 500
    if isinstance(exc, ValueError):
        return 400
    return 500


def log_level_for(status_code: int) -> int:
    if status_code in (400, 404, 409):
        return logging.INFO
    if status_code == 401:
        return logging.WARNING
    if status_code < 500:
        return logging.INFO
    return logging.ERROR


def error_body(
    error_type: str,
    message: str,
    status_code: int,
    error_code: Optional[str] = None,
) -> Dict[str, Any]:
    error: Dict[str, Any] = {
        "type": error_type,
        "message": message,
        "statusCode": status_code,
    }
    if error_code:
        error["errorCode"] = error_code
    return {"error": error}


def _describe(exc: Exception) -> tuple[str, str, Optional[str]]:
    if isinstance(exc, RequestValidationError):
        problems = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item.get("loc", ()) if part != "body")
            problems.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
        return "ValidationError", "; ".join(problems) or "Invalid request", None
    if isinstance(exc, StarletteHTTPException):
        return "HTTPException", str(exc.detail), None
    if isinstance(exc, StorefrontError):
        return type(exc).__name__, exc.message, exc.error_code
    if isinstance(exc, PydanticValidationError):
        return "InternalServerError", f"Stored {exc.title} data is invalid", None
    return type(exc).__name__, str(exc) or type(exc).__name__, None


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get(REQUEST_ID_HEADER, "-")


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_for(exc)
    error_type, message, error_code = _describe(exc)
    request_id = _request_id(request)
    level = log_level_for(status_code)

    logger.log(
        level,
        "Request %s %s failed with status %s. Error: %s. Message: %s. RequestId: %s",
        request.method,
        request.url.path,
        status_code,
        error_type,
        message,
        request_id,
        exc_info=exc if level >= logging.ERROR else None,
    )

    headers = {REQUEST_ID_HEADER: request_id}
    if isinstance(exc, StarletteHTTPException) and exc.headers:
        headers.update(exc.headers)

    return JSONResponse(
        status_code=status_code,
        content=error_body(error_type, message, status_code, error_code),
        headers=headers,
    )


def install_error_handlers(app: FastAPI) -> None:
    for exc_class in (
        StorefrontError,
        RequestValidationError,
        StarletteHTTPException,
        ValueError,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_exception)
