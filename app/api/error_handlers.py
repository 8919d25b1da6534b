"""Error classification pipeline.

Every exception that escapes a route is run through CLASSIFIERS in order; the
first classifier that recognizes it decides the status and `{"msg": ...}` body.
Anything left over becomes a 500 whose cause is logged and never serialized.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import ApiError, ErrorKind, ErrorResponse, NotFoundError, ValidationError

logger = logging.getLogger("app.errors")

Classifier = Callable[[BaseException], Optional[ErrorResponse]]

INTERNAL_ERROR = ErrorResponse(ErrorKind.INTERNAL, "Internal Server Error")


def classify_unmatched_route(exc: BaseException) -> Optional[ErrorResponse]:
    if not isinstance(exc, StarletteHTTPException):
        return None
    if exc.status_code == 404:
        return ErrorResponse(ErrorKind.NOT_FOUND, "Route Not Found")
    if exc.status_code == 405:
        return ErrorResponse(ErrorKind.METHOD_NOT_ALLOWED, "Method Not Allowed")
    return None


def classify_bad_input(exc: BaseException) -> Optional[ErrorResponse]:
    # Malformed ids, FK and NOT NULL violations, unparsable bodies
    if isinstance(exc, (IntegrityError, DataError, RequestValidationError)):
        return ErrorResponse(ErrorKind.VALIDATION, "Bad Request")
    return None


def classify_not_found(exc: BaseException) -> Optional[ErrorResponse]:
    if isinstance(exc, NotFoundError):
        return exc.to_response()
    return None


def classify_validation(exc: BaseException) -> Optional[ErrorResponse]:
    if isinstance(exc, ValidationError):
        return exc.to_response()
    return None


def classify_api_error(exc: BaseException) -> Optional[ErrorResponse]:
    # InternalError carries a diagnostic message, which is never sent
    if isinstance(exc, ApiError) and exc.kind is not ErrorKind.INTERNAL:
        return exc.to_response()
    return None


CLASSIFIERS: Tuple[Classifier, ...] = (
    classify_unmatched_route,
    classify_bad_input,
    classify_not_found,
    classify_validation,
    classify_api_error,
)


def classify(exc: BaseException) -> ErrorResponse:
    for classifier in CLASSIFIERS:
        resolved = classifier(exc)
        if resolved is not None:
            return resolved
    return INTERNAL_ERROR


def render(request: Request, exc: BaseException) -> JSONResponse:
    resolved = classify(exc)
    if resolved.kind is ErrorKind.INTERNAL:
        logger.error(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
            extra={"event": "request_failed"},
        )
    else:
        logger.warning(
            "Request rejected: %s",
            resolved.msg,
            extra={
                "event": "request_rejected",
                "status": resolved.status_code,
                "path": request.url.path,
            },
        )
    return JSONResponse(status_code=resolved.status_code, content=resolved.to_body())


def register_error_handlers(app: FastAPI) -> None:
    """Route every entry exception type into the same pipeline."""

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return render(request, exc)

    for exc_type in (
        StarletteHTTPException,
        RequestValidationError,
        SQLAlchemyError,
        ApiError,
        Exception,
    ):
        app.add_exception_handler(exc_type, handle)
