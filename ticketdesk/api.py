"""HTTP API: application state, routes, error handling and the OpenAPI description."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Flask, current_app, jsonify, request

from ticketdesk.application import (
    CreateTicketCommand,
    CreateTicketCommandHandler,
    DeleteTicketCommand,
    DeleteTicketCommandHandler,
    FindTicketQuery,
    FindTicketQueryHandler,
    ListAllTicketQueryHandler,
    TicketRepository,
    UpdateTicketCommand,
    UpdateTicketCommandHandler,
)
from ticketdesk.errors import ApiError
from ticketdesk.schemas import (
    AppInfoResponse,
    CreateTicketRequest,
    HealthCheckResponse,
    TicketResponse,
    UpdateTicketRequest,
)

_STATE_KEY = "ticketdesk"
_TICKETS_TAG = "Tickets"
_HEALTH_TAG = "Health"
OPENAPI_PATH = "/api-docs/openapi.json"


@dataclass
class AppState:
    """Everything the request handlers need: the repository and the running environment."""

    ticket_repository: TicketRepository
    environment: str = "development"


def _state() -> AppState:
    state = current_app.extensions.get(_STATE_KEY)
    if state is None:
        raise ApiError.internal(RuntimeError("Missing app state"))
    return state


def _json_body() -> Any:
    if not request.is_json:
        raise ApiError.bad_request("Content type error")
    try:
        return json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise ApiError.bad_request(f"Json deserialize error: {exc}") from exc


def _data(payload: Any, status: int = HTTPStatus.OK):
    return jsonify({"data": payload}), int(status)


tickets = Blueprint("tickets", __name__, url_prefix="/api/tickets")
health = Blueprint("health", __name__, url_prefix="/api/health")
info = Blueprint("info", __name__, url_prefix="/api/info")


@tickets.get("")
def list_all():
    handler = ListAllTicketQueryHandler(_state().ticket_repository)
    return _data([TicketResponse.from_dto(dto).to_dict() for dto in handler.execute()])


@tickets.get("/<uuid:ticket_id>")
def find_one(ticket_id: uuid.UUID):
    handler = FindTicketQueryHandler(_state().ticket_repository)
    dto = handler.execute(FindTicketQuery(ticket_id))
    return _data(TicketResponse.from_dto(dto).to_dict())


@tickets.post("")
def create():
    payload = CreateTicketRequest.from_json(_json_body())
    handler = CreateTicketCommandHandler(_state().ticket_repository)
    dto = handler.execute(CreateTicketCommand(payload.title, payload.description))
    return _data(TicketResponse.from_dto(dto).to_dict(), HTTPStatus.CREATED)


@tickets.put("/<uuid:ticket_id>")
def update(ticket_id: uuid.UUID):
    payload = UpdateTicketRequest.from_json(_json_body())
    handler = UpdateTicketCommandHandler(_state().ticket_repository)
    command = UpdateTicketCommand(ticket_id, payload.title, payload.description, payload.status)
    dto = handler.execute(command)
    return _data(TicketResponse.from_dto(dto).to_dict(), HTTPStatus.CREATED)


@tickets.delete("/<uuid:ticket_id>")
def delete(ticket_id: uuid.UUID):
    DeleteTicketCommandHandler(_state().ticket_repository).execute(DeleteTicketCommand(ticket_id))
    return "", int(HTTPStatus.NO_CONTENT)


@health.get("/startup")
def startup():
    return _data(HealthCheckResponse().to_dict())


@health.get("/live")
def live():
    return _data(HealthCheckResponse().to_dict())


@health.get("/ready")
def ready():
    return _data(HealthCheckResponse().to_dict())


@info.get("")
def app_info():
    return _data(AppInfoResponse(_state().environment).to_dict())


def _is_http_exception(error: Exception) -> bool:
    """Routing errors (404, 405 and the like) carry their own response."""
    return isinstance(getattr(error, "code", None), int) and callable(
        getattr(error, "get_response", None)
    )


def _handle_error(error: Exception):
    if _is_http_exception(error):
        return error
    api_error = ApiError.from_exception(error)
    return jsonify(api_error.to_dict()), int(api_error.status_code)


def _ref(name: str) -> Dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def _array_of(name: str) -> Dict[str, Any]:
    return {"application/json": {"schema": {"type": "array", "items": _ref(name)}}}


def _response(description: str, body: str) -> Dict[str, Any]:
    return {"description": description, "content": _array_of(body)}


def _id_param(description: str) -> Dict[str, Any]:
    return {
        "name": "id",
        "in": "path",
        "required": True,
        "description": description,
        "schema": {"type": "string", "format": "uuid"},
    }


def _request_body(name: str) -> Dict[str, Any]:
    return {"required": True, "content": {"application/json": {"schema": _ref(name)}}}


def _health_path(operation: str, what: str) -> Dict[str, Any]:
    return {
        "get": {
            "tags": [_HEALTH_TAG],
            "operationId": operation,
            "responses": {
                "200": _response(f"Display application {what} status", "HealthCheckResponse")
            },
        }
    }


def openapi_spec() -> Dict[str, Any]:
    """The OpenAPI document describing the health and ticket endpoints."""
    text = {"type": "string"}
    return {
        "openapi": "3.1.0",
        "info": {"title": "ticketdesk", "version": "0.1.0"},
        "tags": [{"name": _TICKETS_TAG, "description": "Tickets management endpoints."}],
        "paths": {
            "/api/health/startup": _health_path("startup", "startup"),
            "/api/health/live": _health_path("live", "live"),
            "/api/health/ready": _health_path("ready", "ready"),
            "/api/tickets": {
                "get": {
                    "tags": [_TICKETS_TAG],
                    "operationId": "list_all",
                    "responses": {
                        "200": _response("List current ticket items", "TicketResponse")
                    },
                },
                "post": {
                    "tags": [_TICKETS_TAG],
                    "operationId": "create",
                    "requestBody": _request_body("CreateTicketRequest"),
                    "responses": {"201": _response("Create a ticket item", "TicketResponse")},
                },
            },
            "/api/tickets/{id}": {
                "get": {
                    "tags": [_TICKETS_TAG],
                    "operationId": "find_one",
                    "parameters": [_id_param("Id of the ticket item")],
                    "responses": {"200": _response("Get TICKET item by id", "TicketResponse")},
                },
                "put": {
                    "tags": [_TICKETS_TAG],
                    "operationId": "update",
                    "parameters": [_id_param("Id of the ticket item to update")],
                    "requestBody": _request_body("UpdateTicketRequest"),
                    "responses": {"200": _response("Update a ticket item", "TicketResponse")},
                },
                "delete": {
                    "tags": [_TICKETS_TAG],
                    "operationId": "delete",
                    "parameters": [_id_param("Id of the ticket item to delete")],
                    "responses": {"204": _response("Delete a ticket item", "TicketResponse")},
                },
            },
        },
        "components": {
            "schemas": {
                "TicketStatus": {
                    "type": "string",
                    "enum": ["ToDo", "InProgress", "Done", "Closed"],
                },
                "TicketResponse": {
                    "type": "object",
                    "required": ["id", "title", "description", "status"],
                    "properties": {
                        "id": {"type": "string", "format": "uuid"},
                        "title": text,
                        "description": text,
                        "status": text,
                    },
                },
                "CreateTicketRequest": {
                    "type": "object",
                    "required": ["title", "description"],
                    "properties": {"title": text, "description": text},
                },
                "UpdateTicketRequest": {
                    "type": "object",
                    "required": ["title", "description", "status"],
                    "properties": {
                        "title": text,
                        "description": text,
                        "status": _ref("TicketStatus"),
                    },
                },
                "HealthCheckResponse": {
                    "type": "object",
                    "required": ["status"],
                    "properties": {"status": text},
                },
                "AppInfoResponse": {
                    "type": "object",
                    "required": ["environment"],
                    "properties": {"environment": text},
                },
            }
        },
    }


def create_app(state: AppState) -> Flask:
    """Build the Flask application serving the API over the given state."""
    app = Flask(__name__)
    app.extensions[_STATE_KEY] = state
    app.register_blueprint(tickets)
    app.register_blueprint(health)
    app.register_blueprint(info)
    app.register_error_handler(Exception, _handle_error)
    app.add_url_rule(OPENAPI_PATH, "openapi", lambda: jsonify(openapi_spec()))
    return app