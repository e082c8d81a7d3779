"""Tests for the admin collection endpoints."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from docsearch.api.app import create_app
from docsearch.api.deps import set_engine
from docsearch.config.settings import Settings
from docsearch.core.engine import DocSearchEngine

ADMIN = ("admin", "admin-secret")


@pytest.fixture
def client(settings: Settings, engine: DocSearchEngine) -> Iterator[TestClient]:
    app = create_app(settings)
    set_engine(engine)
    yield TestClient(app, raise_server_exceptions=False)
    set_engine(None)


# ── POST /collections ────────────────────────────────────────────────────────


class TestCreateCollection:
    def test_success(self, client: TestClient, adapter: AsyncMock) -> None:
        response = client.post("/api/v1/collections", json={"handle": "agency_blogs", "token": "secret"}, auth=ADMIN)

        assert response.status_code == 201
        assert response.json() == {
            "status": 200,
            "developer_message": "OK",
            "user_message": "Your collection was successfully created.",
        }
        index, doc_id, record = adapter.index_document.await_args.args
        assert (index, doc_id) == ("docsearch-collections", "agency_blogs")
        assert record["token"] == "secret"

    def test_missing_parameters(self, client: TestClient) -> None:
        response = client.post("/api/v1/collections", json={}, auth=ADMIN)
        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "developer_message": "handle is missing, handle is empty, token is missing, token is empty",
        }

    def test_illegal_handle(self, client: TestClient) -> None:
        response = client.post("/api/v1/collections", json={"handle": "agency-blogs", "token": "secret"}, auth=ADMIN)
        assert response.status_code == 400
        assert response.json() == {"status": 400, "developer_message": "handle is invalid"}

    def test_bad_credentials(self, client: TestClient, adapter: AsyncMock) -> None:
        response = client.post(
            "/api/v1/collections", json={"handle": "agency_blogs", "token": "secret"}, auth=("nope", "wrong")
        )
        assert response.status_code == 400
        assert response.json() == {"status": 400, "developer_message": "Unauthorized"}
        adapter.index_document.assert_not_awaited()

    def test_no_credentials(self, client: TestClient) -> None:
        response = client.post("/api/v1/collections", json={"handle": "agency_blogs", "token": "secret"})
        assert response.status_code == 400
        assert response.json()["developer_message"] == "Unauthorized"

    def test_something_terrible_happens(self, client: TestClient, adapter: AsyncMock) -> None:
        adapter.index_document.side_effect = RuntimeError("disk on fire")
        response = client.post("/api/v1/collections", json={"handle": "agency_blogs", "token": "secret"}, auth=ADMIN)
        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "developer_message": "Something unexpected happened and we've been alerted.",
        }

    def test_read_only_mode(self, client: TestClient, settings: Settings, adapter: AsyncMock) -> None:
        settings.updates_allowed = False
        settings.maintenance_message = "Down for maintenance until noon."

        response = client.post("/api/v1/collections", json={"handle": "agency_blogs", "token": "secret"}, auth=ADMIN)

        assert response.status_code == 503
        assert response.json() == {"status": 503, "developer_message": "Down for maintenance until noon."}
        adapter.index_document.assert_not_awaited()


# ── GET /collections/{handle} ────────────────────────────────────────────────


class TestGetCollection:
    def test_success(self, client: TestClient, adapter: AsyncMock) -> None:
        adapter.count.return_value = 2
        adapter.execute_query.return_value = {
            "aggregations": {"last_document_sent": {"value": 1.5e12, "value_as_string": "2017-07-14T02:40:00.000Z"}}
        }

        response = client.get("/api/v1/collections/agency_blogs", auth=ADMIN)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == 200
        assert data["developer_message"] == "OK"
        assert data["collection"]["id"] == "agency_blogs"
        assert data["collection"]["token"] == "secret"
        assert data["collection"]["document_total"] == 2
        assert data["collection"]["last_document_sent"].startswith("2017-07-14T02:40:00")

    def test_missing_collection(self, client: TestClient) -> None:
        response = client.get("/api/v1/collections/missing_site", auth=ADMIN)
        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": "Could not find collection 'missing_site'"}

    def test_allowed_in_read_only_mode(self, client: TestClient, settings: Settings) -> None:
        settings.updates_allowed = False
        assert client.get("/api/v1/collections/agency_blogs", auth=ADMIN).status_code == 200


# ── DELETE /collections/{handle} ─────────────────────────────────────────────


class TestDeleteCollection:
    def test_success(self, client: TestClient, adapter: AsyncMock) -> None:
        response = client.delete("/api/v1/collections/agency_blogs", auth=ADMIN)

        assert response.status_code == 200
        assert response.json()["user_message"] == "Your collection was successfully deleted."
        adapter.delete_index.assert_awaited_once_with("docsearch-documents-agency_blogs")

    def test_missing_collection(self, client: TestClient, adapter: AsyncMock) -> None:
        response = client.delete("/api/v1/collections/missing_site", auth=ADMIN)
        assert response.status_code == 400
        assert "error" in response.json()
        adapter.delete_index.assert_not_awaited()
