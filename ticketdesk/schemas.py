"""Request bodies with their validation, and response bodies of the HTTP API."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from ticketdesk.application import TicketDto
from ticketdesk.domain import TicketStatus
from ticketdesk.errors import ApiError

_TITLE_MESSAGE = "Title must be between 1 and 255 characters"
_DESCRIPTION_MESSAGE = "Description is required"
_TITLE_MAX = 255

_STATUS_NAMES = {
    "ToDo": TicketStatus.TO_DO,
    "InProgress": TicketStatus.IN_PROGRESS,
    "Done": TicketStatus.DONE,
    "Closed": TicketStatus.CLOSED,
}

_OK_STATUS = "Ok"


def _deserialize_error(detail: str) -> ApiError:
    return ApiError.bad_request(f"Json deserialize error: {detail}")


def _require_object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise _deserialize_error("invalid type: expected a JSON object")
    return data


def _string_field(data: Mapping[str, Any], name: str) -> str:
    if name not in data:
        raise _deserialize_error(f"missing field `{name}`")
    value = data[name]
    if not isinstance(value, str):
        raise _deserialize_error(f"invalid type for field `{name}`: expected a string")
    return value


def _status_field(data: Mapping[str, Any]) -> TicketStatus:
    if "status" not in data:
        raise _deserialize_error("missing field `status`")
    value = data["status"]
    if not isinstance(value, str) or value not in _STATUS_NAMES:
        expected = ", ".join(f"`{name}`" for name in _STATUS_NAMES)
        raise _deserialize_error(f"unknown variant `{value}`, expected one of {expected}")
    return _STATUS_NAMES[value]


def _validate_text(title: str, description: str) -> None:
    failures: Dict[str, List[str]] = {}
    if not 1 <= len(title) <= _TITLE_MAX:
        failures["title"] = [_TITLE_MESSAGE]
    if len(description) < 1:
        failures["description"] = [_DESCRIPTION_MESSAGE]
    if failures:
        raise ApiError.validation(failures)


@dataclass(frozen=True)
class CreateTicketRequest:
    title: str
    description: str

    @classmethod
    def from_json(cls, data: Any) -> "CreateTicketRequest":
        """Read and validate a parsed JSON body; raise ApiError when it is unusable."""
        body = _require_object(data)
        title = _string_field(body, "title")
        description = _string_field(body, "description")
        _validate_text(title, description)
        return cls(title=title, description=description)


@dataclass(frozen=True)
class UpdateTicketRequest:
    title: str
    description: str
    status: TicketStatus

    @classmethod
    def from_json(cls, data: Any) -> "UpdateTicketRequest":
        """Read and validate a parsed JSON body; status uses the names ToDo, InProgress, Done, Closed."""
        body = _require_object(data)
        title = _string_field(body, "title")
        description = _string_field(body, "description")
        status = _status_field(body)
        _validate_text(title, description)
        return cls(title=title, description=description, status=status)


@dataclass(frozen=True)
class TicketResponse:
    id: uuid.UUID
    title: str
    description: str
    status: str

    @classmethod
    def from_dto(cls, dto: TicketDto) -> "TicketResponse":
        return cls(id=dto.id, title=dto.title, description=dto.description, status=dto.status)

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "status": self.status,
        }


@dataclass(frozen=True)
class HealthCheckResponse:
    status: str = _OK_STATUS

    def to_dict(self) -> Dict[str, str]:
        return {"status": self.status}


@dataclass(frozen=True)
class AppInfoResponse:
    environment: str

    def to_dict(self) -> Dict[str, str]:
        return {"environment": self.environment}