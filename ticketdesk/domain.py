"""Core ticket model: the ticket entity, its status and domain errors."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


class TicketStatus(Enum):
    """Lifecycle state of a ticket."""

    TO_DO = "to_do"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "TicketStatus":
        """Read a status name case-insensitively; unknown names become TO_DO."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.TO_DO


@dataclass
class Ticket:
    """A unit of work tracked by the desk."""

    id: uuid.UUID
    title: str
    description: str
    status: TicketStatus = field(default=TicketStatus.TO_DO)

    @classmethod
    def create(cls, title: str, description: str) -> "Ticket":
        """Make a new ticket with a fresh random id in the TO_DO state."""
        return cls(
            id=uuid.uuid4(),
            title=title,
            description=description,
            status=TicketStatus.TO_DO,
        )


class DomainError(Exception):
    """Base class for errors raised by the domain layer."""


class NotFoundError(DomainError):
    """No item exists with the requested id."""

    def __init__(self, id: uuid.UUID) -> None:
        self.id = id
        super().__init__(f"item with id {id} not found")


class InternalError(DomainError):
    """An unexpected failure; the detail is kept but not shown."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__("internal error")