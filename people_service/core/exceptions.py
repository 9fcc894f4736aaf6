"""Exception hierarchy for the people service."""

from __future__ import annotations

from typing import Any, Dict

from bson import ObjectId
from fastapi import status
from fastapi.encoders import jsonable_encoder

# Attributes copied from driver and cast errors into the error payload when present.
_ERROR_ATTRIBUTES = ("code", "codeName", "details", "path", "value", "kind")


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class DatabaseUnavailableError(ApplicationError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "database_unavailable"


class RequestBodyError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_json"


class StoreOperationError(ApplicationError):
    """A document store call failed.

    Wraps the raw driver (or cast) error so route handlers can surface it
    verbatim with the status code their operation uses.
    """

    code = "store_operation_failed"

    def __init__(self, error: BaseException) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def payload(self) -> Dict[str, Any]:
        return describe_error(self.error)


def describe_error(error: BaseException) -> Dict[str, Any]:
    """Serialize a raw exception into a JSON-compatible dict."""

    payload: Dict[str, Any] = {"name": type(error).__name__, "message": str(error)}
    for attribute in _ERROR_ATTRIBUTES:
        value = getattr(error, attribute, None)
        if value is not None:
            payload[attribute] = value
    return jsonable_encoder(payload, custom_encoder={ObjectId: str, bytes: repr})
