import uuid

import pytest

from ticketdesk.api import AppState, create_app, openapi_spec
from ticketdesk.application import TicketRepository
from ticketdesk.repository import SqlTicketRepository, configure


class _BrokenRepository(TicketRepository):
    def list_all(self):
        raise RuntimeError("storage down")

    def find_by_id(self, entity_id):
        raise RuntimeError("storage down")

    def save(self, entity):
        raise RuntimeError("storage down")

    def delete(self, entity_id):
        raise RuntimeError("storage down")


@pytest.fixture
def client():
    repository = SqlTicketRepository(configure(":memory:"))
    app = create_app(AppState(ticket_repository=repository, environment="testing"))
    return app.test_client()


def _create(client, title="Fix login", description="Users cannot sign in"):
    response = client.post("/api/tickets", json={"title": title, "description": description})
    assert response.status_code == 201
    return response.get_json()["data"]


@pytest.mark.parametrize("probe", ["startup", "live", "ready"])
def test_health_probes(client, probe):
    response = client.get(f"/api/health/{probe}")
    assert response.status_code == 200
    assert response.get_json() == {"data": {"status": "Ok"}}


def test_info_reports_environment(client):
    response = client.get("/api/info")
    assert response.status_code == 200
    assert response.get_json() == {"data": {"environment": "testing"}}


def test_create_then_find(client):
    created = _create(client)
    assert created["status"] == "to_do"
    assert created["title"] == "Fix login"
    uuid.UUID(created["id"])
    response = client.get(f"/api/tickets/{created['id']}")
    assert response.status_code == 200
    assert response.get_json()["data"] == created


def test_list_all_returns_every_ticket(client):
    first = _create(client, title="one")
    second = _create(client, title="two")
    response = client.get("/api/tickets")
    assert response.status_code == 200
    assert response.get_json()["data"] == [first, second]


def test_list_all_empty(client):
    assert client.get("/api/tickets").get_json() == {"data": []}


def test_update_changes_ticket(client):
    created = _create(client)
    response = client.put(
        f"/api/tickets/{created['id']}",
        json={"title": "Fixed", "description": "Done now", "status": "Done"},
    )
    assert response.status_code == 201
    updated = response.get_json()["data"]
    assert updated == {
        "id": created["id"],
        "title": "Fixed",
        "description": "Done now",
        "status": "done",
    }
    assert client.get(f"/api/tickets/{created['id']}").get_json()["data"] == updated


def test_update_unknown_id_inserts(client):
    ticket_id = uuid.uuid4()
    response = client.put(
        f"/api/tickets/{ticket_id}",
        json={"title": "t", "description": "d", "status": "InProgress"},
    )
    assert response.status_code == 201
    found = client.get(f"/api/tickets/{ticket_id}").get_json()["data"]
    assert found["status"] == "in_progress"


def test_delete_then_not_found(client):
    created = _create(client)
    response = client.delete(f"/api/tickets/{created['id']}")
    assert response.status_code == 204
    assert response.data == b""
    missing = client.get(f"/api/tickets/{created['id']}")
    assert missing.status_code == 404
    assert missing.get_json() == {
        "code": 404,
        "message": f"item with id {created['id']} not found",
    }


def test_create_validation_error(client):
    response = client.post("/api/tickets", json={"title": "", "description": ""})
    assert response.status_code == 400
    body = response.get_json()
    assert body["code"] == 400
    assert body["message"] == "Validation error"
    assert {"field": "title", "message": "Title must be between 1 and 255 characters"} in body[
        "errors"
    ]
    assert {"field": "description", "message": "Description is required"} in body["errors"]


def test_create_malformed_json(client):
    response = client.post(
        "/api/tickets", data="{not json", content_type="application/json"
    )
    assert response.status_code == 400
    body = response.get_json()
    assert body["code"] == 400
    assert "errors" not in body


def test_create_missing_field(client):
    response = client.post("/api/tickets", json={"title": "only title"})
    assert response.status_code == 400
    assert "description" in response.get_json()["message"]


def test_update_unknown_status_rejected(client):
    created = _create(client)
    response = client.put(
        f"/api/tickets/{created['id']}",
        json={"title": "t", "description": "d", "status": "later"},
    )
    assert response.status_code == 400
    assert client.get(f"/api/tickets/{created['id']}").get_json()["data"] == created


def test_invalid_uuid_path_is_not_found(client):
    assert client.get("/api/tickets/not-a-uuid").status_code == 404


def test_repository_failure_is_internal_error():
    app = create_app(AppState(ticket_repository=_BrokenRepository()))
    response = app.test_client().get("/api/tickets")
    assert response.status_code == 500
    assert response.get_json() == {"code": 500, "message": "Internal server error"}


def test_default_environment_reported():
    app = create_app(AppState(ticket_repository=_BrokenRepository()))
    body = app.test_client().get("/api/info").get_json()
    assert body == {"data": {"environment": "development"}}


def test_openapi_spec_lists_paths_and_tag():
    spec = openapi_spec()
    assert set(spec["paths"]) == {
        "/api/health/startup",
        "/api/health/live",
        "/api/health/ready",
        "/api/tickets",
        "/api/tickets/{id}",
    }
    assert set(spec["paths"]["/api/tickets/{id}"]) == {"get", "put", "delete"}
    assert spec["tags"] == [
        {"name": "Tickets", "description": "Tickets management endpoints."}
    ]


def test_openapi_spec_served(client):
    response = client.get("/api-docs/openapi.json")
    assert response.status_code == 200
    assert response.get_json() == openapi_spec()