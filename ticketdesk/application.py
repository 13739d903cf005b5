"""Use cases over tickets: commands, queries, their handlers and the repository contract."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ticketdesk.domain import Ticket, TicketStatus


@dataclass(frozen=True)
class CreateTicketCommand:
    title: str
    description: str


@dataclass(frozen=True)
class UpdateTicketCommand:
    id: uuid.UUID
    title: str
    description: str
    status: TicketStatus


@dataclass(frozen=True)
class DeleteTicketCommand:
    id: uuid.UUID


@dataclass(frozen=True)
class FindTicketQuery:
    id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class TicketDto:
    """Ticket data handed out of the application layer."""

    id: uuid.UUID
    title: str
    description: str
    status: str

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "TicketDto":
        return cls(
            id=ticket.id,
            title=ticket.title,
            description=ticket.description,
            status=str(ticket.status),
        )


class TicketRepository(ABC):
    """Storage of tickets."""

    @abstractmethod
    def list_all(self) -> List[Ticket]:
        """Return every stored ticket."""

    @abstractmethod
    def find_by_id(self, entity_id: uuid.UUID) -> Ticket:
        """Return the ticket with this id or raise NotFoundError."""

    @abstractmethod
    def save(self, entity: Ticket) -> Ticket:
        """Insert or replace the ticket and return what was stored."""

    @abstractmethod
    def delete(self, entity_id: uuid.UUID) -> None:
        """Remove the ticket with this id, if any."""


class _Handler:
    def __init__(self, repository: TicketRepository) -> None:
        self.repository = repository


class FindTicketQueryHandler(_Handler):
    def __init__(self, repository: TicketRepository) -> None:
        super().__init__(repository)

    def execute(self, query: FindTicketQuery) -> TicketDto:
        if query.id is None:
            raise ValueError("query id is required")
        return TicketDto.from_ticket(self.repository.find_by_id(query.id))


class ListAllTicketQueryHandler(_Handler):
    def __init__(self, repository: TicketRepository) -> None:
        super().__init__(repository)

    def execute(self) -> List[TicketDto]:
        return [TicketDto.from_ticket(t) for t in self.repository.list_all()]


class CreateTicketCommandHandler(_Handler):
    def __init__(self, repository: TicketRepository) -> None:
        super().__init__(repository)

    def execute(self, command: CreateTicketCommand) -> TicketDto:
        ticket = Ticket.create(command.title, command.description)
        return TicketDto.from_ticket(self.repository.save(ticket))


class UpdateTicketCommandHandler(_Handler):
    def __init__(self, repository: TicketRepository) -> None:
        super().__init__(repository)

    def execute(self, command: UpdateTicketCommand) -> TicketDto:
        ticket = Ticket(
            id=command.id,
            title=command.title,
            description=command.description,
            status=command.status,
        )
        return TicketDto.from_ticket(self.repository.save(ticket))


class DeleteTicketCommandHandler(_Handler):
    def __init__(self, repository: TicketRepository) -> None:
        super().__init__(repository)

    def execute(self, command: DeleteTicketCommand) -> None:
        self.repository.delete(command.id)