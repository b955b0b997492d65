# app/core/errors.py
"""
Application error taxonomy and the JSON error envelope.

Every failure leaves the API as:

    {"error": "<human readable message>", "details": "<optional diagnostics>"}

Services raise the subclasses below the same way they would raise a plain
HTTPException; the handlers registered by `register_exception_handlers`
render the envelope.
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None):
        super().__init__(status_code=self.status_code_default, detail=message)
        self.details = details


class ValidationError(AppError):
    status_code_default = status.HTTP_400_BAD_REQUEST


class Unauthorized(AppError):
    status_code_default = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    status_code_default = status.HTTP_403_FORBIDDEN


class NotFound(AppError):
    status_code_default = status.HTTP_404_NOT_FOUND


class InvalidState(AppError):
    status_code_default = status.HTTP_400_BAD_REQUEST


class UpstreamFailure(AppError):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str, details: str | None = None) -> dict[str, str]:
    body = {"error": message}
    if details:
        body["details"] = details
    return body


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    details = getattr(exc, "details", None)
    if isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = "Request failed"
        details = details or str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, details),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request", "; ".join(problems)),
    )


async def store_failure_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Document store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Document store operation failed", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)
