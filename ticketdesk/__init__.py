"""Ticket-tracking HTTP API on Flask and SQLite: tickets, health checks and an OpenAPI document."""

__version__ = "0.1.0"

__all__ = ["__version__"]