"""Errors reported by the HTTP API and their JSON body."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ticketdesk.domain import InternalError, NotFoundError

_INTERNAL_MESSAGE = "Internal server error"
_VALIDATION_MESSAGE = "Validation error"
_INVALID_VALUE = "Invalid value"


@dataclass(frozen=True)
class ValidationFieldError:
    """One failed check on one request field."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ApiError(Exception):
    """An error with an HTTP status, a message and, for validation, the failed fields."""

    def __init__(
        self,
        status_code: HTTPStatus,
        message: str,
        errors: Optional[List[ValidationFieldError]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = HTTPStatus(status_code)
        self.message = message
        self.errors = errors

    @classmethod
    def internal(cls, error: BaseException) -> "ApiError":
        """A 500 error that hides the cause behind a generic message."""
        api_error = cls(HTTPStatus.INTERNAL_SERVER_ERROR, _INTERNAL_MESSAGE)
        api_error.__cause__ = error
        return api_error

    @classmethod
    def bad_request(cls, message: str) -> "ApiError":
        return cls(HTTPStatus.BAD_REQUEST, message)

    @classmethod
    def from_exception(cls, error: BaseException) -> "ApiError":
        """Map an exception from the lower layers to an API error."""
        if isinstance(error, ApiError):
            return error
        if isinstance(error, NotFoundError):
            api_error = cls(HTTPStatus.NOT_FOUND, str(error))
        elif isinstance(error, InternalError):
            api_error = cls(HTTPStatus.INTERNAL_SERVER_ERROR, str(error))
        else:
            api_error = cls(HTTPStatus.INTERNAL_SERVER_ERROR, _INTERNAL_MESSAGE)
        api_error.__cause__ = error
        return api_error

    @classmethod
    def validation(cls, errors: Mapping[str, Iterable[Optional[str]]]) -> "ApiError":
        """A 400 error listing each field's failed checks; a missing message reads 'Invalid value'."""
        field_errors = [
            ValidationFieldError(field=name, message=message or _INVALID_VALUE)
            for name, messages in errors.items()
            for message in messages
        ]
        return cls(HTTPStatus.BAD_REQUEST, _VALIDATION_MESSAGE, field_errors)

    def to_dict(self) -> Dict[str, Any]:
        """The JSON error body; 'errors' appears only for validation failures."""
        body: Dict[str, Any] = {"code": int(self.status_code), "message": self.message}
        if self.errors is not None:
            body["errors"] = [error.to_dict() for error in self.errors]
        return body