"""SQLite-backed ticket storage: schema setup, row mapping and the repository."""

from __future__ import annotations

import sqlite3
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Tuple

from ticketdesk.application import TicketRepository
from ticketdesk.domain import NotFoundError, Ticket, TicketStatus

_SCHEMA = """
CREATE TABLE IF NOT EXISTS tickets (
    id TEXT PRIMARY KEY NOT NULL,
    title VARCHAR(255) NOT NULL,
    description TEXT NOT NULL,
    status VARCHAR(255) NOT NULL,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

_COLUMNS = "id, title, description, status, created_at, updated_at"

_UPSERT = f"""
INSERT INTO tickets ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)
ON CONFLICT(id) DO UPDATE SET
    title = excluded.title,
    description = excluded.description,
    status = excluded.status,
    created_at = excluded.created_at,
    updated_at = excluded.updated_at
"""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class TicketRecord:
    """A ticket as it is stored in the tickets table."""

    id: uuid.UUID
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "TicketRecord":
        """Build a record from a ticket, stamping both timestamps with the current UTC time."""
        return cls(
            id=ticket.id,
            title=ticket.title,
            description=ticket.description,
            status=str(ticket.status),
            created_at=_utc_now(),
            updated_at=_utc_now(),
        )

    def to_ticket(self) -> Ticket:
        """Turn the record back into a domain ticket."""
        return Ticket(
            id=self.id,
            title=self.title,
            description=self.description,
            status=TicketStatus.parse(self.status),
        )

    def _as_row(self) -> Tuple[str, str, str, str, str, str]:
        return (
            str(self.id),
            self.title,
            self.description,
            self.status,
            self.created_at.isoformat(),
            self.updated_at.isoformat(),
        )

    @classmethod
    def _from_row(cls, row: Tuple[str, str, str, str, str, str]) -> "TicketRecord":
        id_text, title, description, status, created_at, updated_at = row
        return cls(
            id=uuid.UUID(id_text),
            title=title,
            description=description,
            status=status,
            created_at=datetime.fromisoformat(created_at),
            updated_at=datetime.fromisoformat(updated_at),
        )


def _database_path(database_url: str) -> str:
    if database_url.startswith("sqlite:///"):
        return database_url[len("sqlite:///"):] or ":memory:"
    if database_url.startswith("sqlite://"):
        rest = database_url[len("sqlite://"):]
        return rest or ":memory:"
    if "://" in database_url:
        scheme = database_url.split("://", 1)[0]
        raise ValueError(f"unsupported database scheme: {scheme}")
    return database_url


def configure(database_url: str) -> sqlite3.Connection:
    """Open the database, create the tickets table if missing, and return the connection."""
    connection = sqlite3.connect(_database_path(database_url), check_same_thread=False)
    with connection:
        connection.execute(_SCHEMA)
    return connection


class SqlTicketRepository(TicketRepository):
    """Ticket repository over an SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._lock = threading.Lock()

    def list_all(self) -> List[Ticket]:
        with self._lock:
            rows = self._connection.execute(
                f"SELECT {_COLUMNS} FROM tickets ORDER BY rowid"
            ).fetchall()
        return [TicketRecord._from_row(row).to_ticket() for row in rows]

    def find_by_id(self, entity_id: uuid.UUID) -> Ticket:
        with self._lock:
            row = self._connection.execute(
                f"SELECT {_COLUMNS} FROM tickets WHERE id = ? LIMIT 1",
                (str(entity_id),),
            ).fetchone()
        if row is None:
            raise NotFoundError(entity_id)
        return TicketRecord._from_row(row).to_ticket()

    def save(self, entity: Ticket) -> Ticket:
        record = TicketRecord.from_ticket(entity)
        with self._lock, self._connection:
            self._connection.execute(_UPSERT, record._as_row())
        return record.to_ticket()

    def delete(self, entity_id: uuid.UUID) -> None:
        with self._lock, self._connection:
            self._connection.execute("DELETE FROM tickets WHERE id = ?", (str(entity_id),))