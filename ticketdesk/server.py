"""Command-line entry point: reads settings, opens the database and serves the API."""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from flask import Flask

from ticketdesk.api import AppState, create_app
from ticketdesk.repository import SqlTicketRepository, configure

logger = logging.getLogger(__name__)

_DEFAULT_HTTP_URL = "127.0.0.1:8080"
_DEFAULT_DATABASE_URL = "sqlite:///tickets.db"
_DEFAULT_ENVIRONMENT = "development"


def build_app(database_url: str, environment: str) -> Flask:
    """Open the database, prepare its schema and return the application serving it."""
    connection = configure(database_url)
    state = AppState(ticket_repository=SqlTicketRepository(connection), environment=environment)
    return create_app(state)


def _parse_address(address: str) -> Tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"invalid HTTP address: {address}")
    return host, int(port)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ticketdesk", description="Serve the ticket desk API.")
    parser.add_argument(
        "--http-url",
        default=os.environ.get("HTTP_URL", _DEFAULT_HTTP_URL),
        help="host:port to listen on (env HTTP_URL)",
    )
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL", _DEFAULT_DATABASE_URL),
        help="database location (env DATABASE_URL)",
    )
    parser.add_argument(
        "--environment",
        default=os.environ.get("ENVIRONMENT", _DEFAULT_ENVIRONMENT),
        help="name of the running environment (env ENVIRONMENT)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Start the HTTP server and block until it stops."""
    load_dotenv()
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "DEBUG").upper())
    args = _parser().parse_args(argv)
    host, port = _parse_address(args.http_url)

    logger.info("Starting HTTP server at %s", args.http_url)
    logger.debug(
        "with configuration: http_url=%s database_url=%s environment=%s",
        args.http_url,
        args.database_url,
        args.environment,
    )

    app = build_app(args.database_url, args.environment)
    app.run(host=host, port=port)
    return 0