"""Error kinds raised by the services and the response shape they map to.

Every failure that leaves the API is one of a closed set of kinds. Services
raise the typed errors below with a fixed, user-safe message; the pipeline in
``app.api.error_handlers`` turns any exception into an ``ErrorResponse``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INTERNAL = "internal"


HTTP_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class ErrorResponse:
    kind: ErrorKind
    msg: str

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def to_body(self) -> dict:
        return {"msg": self.msg}


class ApiError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL
    default_msg: str = "Internal Server Error"

    def __init__(self, msg: str | None = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(kind=self.kind, msg=self.msg)


class ValidationError(ApiError):
    """Caller supplied a malformed or disallowed parameter."""

    kind = ErrorKind.VALIDATION
    default_msg = "Bad Request"


class NotFoundError(ApiError):
    """A well-formed reference does not resolve to an entity."""

    kind = ErrorKind.NOT_FOUND
    default_msg = "Not Found"


class MethodNotAllowedError(ApiError):
    kind = ErrorKind.METHOD_NOT_ALLOWED
    default_msg = "Method Not Allowed"


class InternalError(ApiError):
    kind = ErrorKind.INTERNAL
