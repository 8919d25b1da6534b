from __future__ import annotations

import asyncio

import pytest
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import DataError, IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.error_handlers import CLASSIFIERS, classify
from app.core.errors import ErrorKind, InternalError, MethodNotAllowedError, NotFoundError, ValidationError


def _store_error(cls):
    return cls("SELECT 1", {}, Exception("driver detail"))


@pytest.mark.parametrize("exc,status,msg", [
    (StarletteHTTPException(status_code=404), 404, "Route Not Found"),
    (StarletteHTTPException(status_code=405), 405, "Method Not Allowed"),
    (_store_error(IntegrityError), 400, "Bad Request"),
    (_store_error(DataError), 400, "Bad Request"),
    (RequestValidationError([]), 400, "Bad Request"),
    (NotFoundError("User Not Found"), 404, "User Not Found"),
    (ValidationError("Bad Request: Invalid order query"), 400, "Bad Request: Invalid order query"),
    (MethodNotAllowedError(), 405, "Method Not Allowed"),
])
def test_classify(exc, status, msg):
    resolved = classify(exc)
    assert resolved.status_code == status
    assert resolved.to_body() == {"msg": msg}


@pytest.mark.parametrize("exc", [
    RuntimeError("boom"),
    asyncio.TimeoutError(),
    _store_error(OperationalError),
    StarletteHTTPException(status_code=418),
    InternalError("secret detail"),
])
def test_everything_else_is_internal(exc):
    resolved = classify(exc)
    assert resolved.kind is ErrorKind.INTERNAL
    assert resolved.status_code == 500
    assert resolved.to_body() == {"msg": "Internal Server Error"}


def test_classifiers_are_pure():
    exc = NotFoundError("article_id not found")
    for classifier in CLASSIFIERS:
        assert classifier(exc) == classifier(exc)
    assert exc.msg == "article_id not found"
