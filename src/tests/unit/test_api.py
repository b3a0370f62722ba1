"""Tests for the REST API."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import notevault.api.middleware as middleware
from notevault.api.app import create_app

NOTE_ROW = {
    "id": "1",
    "content": "hello",
    "created_at": "2024-01-01T00:00:00Z",
    "updated_at": None,
}

CONNECTION_ROW = {
    "id": "c1",
    "source_id": "1",
    "target_id": "2",
    "strength": 0.75,
    "type_name": "manual",
    "created_at": "2024-01-05T00:00:00Z",
}


class TestHealth:
    """Tests for health endpoints."""

    def test_health(self, api_client: TestClient):
        response = api_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["commands"] == 10

    def test_liveness(self, api_client: TestClient):
        assert api_client.get("/api/v1/health/live").json() == {"status": "ok"}


class TestAuthentication:
    """Tests for the API key middleware."""

    def test_fails_closed_without_configured_key(self, monkeypatch, registry):
        monkeypatch.setattr(middleware, "NOTEVAULT_API_KEY", None)
        monkeypatch.setattr(middleware, "NOTEVAULT_ALLOW_NO_AUTH", False)
        client = TestClient(create_app())

        response = client.get("/api/v1/vault/exists", params={"path": "/"})

        assert response.status_code == 503

    def test_health_is_public(self, monkeypatch, registry):
        monkeypatch.setattr(middleware, "NOTEVAULT_API_KEY", "secret")
        client = TestClient(create_app())

        assert client.get("/api/v1/health").status_code == 200

    @pytest.mark.parametrize(
        "headers,expected_status",
        [
            ({}, 401),
            ({"X-API-Key": "wrong"}, 401),
            ({"X-API-Key": "secret"}, 200),
        ],
    )
    def test_api_key_required(self, monkeypatch, registry, headers, expected_status):
        monkeypatch.setattr(middleware, "NOTEVAULT_API_KEY", "secret")
        client = TestClient(create_app())

        response = client.get(
            "/api/v1/vault/exists", params={"path": "/"}, headers=headers
        )

        assert response.status_code == expected_status


class TestVaultEndpoints:
    """Tests for /vault/exists."""

    def test_existing_and_missing(self, api_client: TestClient, vault: Path):
        exists = api_client.get("/api/v1/vault/exists", params={"path": str(vault)})
        missing = api_client.get(
            "/api/v1/vault/exists", params={"path": str(vault / "missing")}
        )

        assert exists.json() == {"exists": True}
        assert missing.json() == {"exists": False}


class TestNotesEndpoints:
    """Tests for /notes."""

    def test_empty_vault(self, api_client: TestClient, vault: Path):
        response = api_client.get("/api/v1/notes", params={"vault_path": str(vault)})

        assert response.status_code == 200
        assert response.json() == []

    def test_write_then_read(self, api_client: TestClient, vault: Path):
        params = {"vault_path": str(vault)}

        written = api_client.put("/api/v1/notes", params=params, json=[NOTE_ROW])
        read = api_client.get("/api/v1/notes", params=params)

        assert written.status_code == 200
        assert written.json() == {"ok": True, "count": 1}
        assert read.json() == [NOTE_ROW]

    def test_unknown_keys_in_body_rejected(self, api_client: TestClient, vault: Path):
        response = api_client.put(
            "/api/v1/notes",
            params={"vault_path": str(vault)},
            json=[{**NOTE_ROW, "title": "extra"}],
        )

        assert response.status_code == 422
        assert not (vault / "notes.json").exists()

    def test_malformed_file_is_422(self, api_client: TestClient, vault: Path):
        (vault / "notes.json").write_text("not json")

        response = api_client.get("/api/v1/notes", params={"vault_path": str(vault)})

        assert response.status_code == 422
        assert response.json()["kind"] == "parse_error"
        assert response.json()["detail"].startswith("Failed to parse notes:")

    def test_write_to_missing_vault_is_500(self, api_client: TestClient, tmp_path):
        response = api_client.put(
            "/api/v1/notes",
            params={"vault_path": str(tmp_path / "missing")},
            json=[NOTE_ROW],
        )

        assert response.status_code == 500
        assert response.json()["kind"] == "io_error"

    def test_overlong_vault_path(self, api_client: TestClient, tmp_path: Path):
        params = {"vault_path": str(tmp_path / ("x" * 300))}

        read = api_client.get("/api/v1/notes", params=params)
        written = api_client.put("/api/v1/notes", params=params, json=[NOTE_ROW])

        assert read.status_code == 200
        assert read.json() == []
        assert written.status_code == 500
        assert written.json()["kind"] == "io_error"

    def test_vault_path_is_required(self, api_client: TestClient):
        assert api_client.get("/api/v1/notes").status_code == 422

    def test_single_note_lifecycle(self, api_client: TestClient, vault: Path):
        params = {"vault_path": str(vault)}

        saved = api_client.put("/api/v1/notes/1", params=params, json=NOTE_ROW)
        fetched = api_client.get("/api/v1/notes/1", params=params)
        deleted = api_client.delete("/api/v1/notes/1", params=params)
        gone = api_client.get("/api/v1/notes/1", params=params)

        assert saved.json() == NOTE_ROW
        assert fetched.json() == NOTE_ROW
        assert deleted.json() == {"deleted": True}
        assert gone.status_code == 404
        assert gone.json()["kind"] == "not_found"

    def test_save_note_id_mismatch(self, api_client: TestClient, vault: Path):
        response = api_client.put(
            "/api/v1/notes/other", params={"vault_path": str(vault)}, json=NOTE_ROW
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "parse_error"

    def test_delete_unknown_note_is_404(self, api_client: TestClient, vault: Path):
        response = api_client.delete(
            "/api/v1/notes/nope", params={"vault_path": str(vault)}
        )

        assert response.status_code == 404


class TestConnectionsEndpoints:
    """Tests for /connections."""

    def test_write_then_read(self, api_client: TestClient, vault: Path):
        params = {"vault_path": str(vault)}

        api_client.put("/api/v1/connections", params=params, json=[CONNECTION_ROW])
        response = api_client.get("/api/v1/connections", params=params)

        assert response.json() == [CONNECTION_ROW]

    def test_save_and_delete(self, api_client: TestClient, vault: Path):
        params = {"vault_path": str(vault)}

        saved = api_client.put(
            "/api/v1/connections/c1", params=params, json=CONNECTION_ROW
        )
        deleted = api_client.delete("/api/v1/connections/c1", params=params)
        again = api_client.delete("/api/v1/connections/c1", params=params)

        assert saved.json() == CONNECTION_ROW
        assert deleted.json() == {"deleted": True}
        assert again.status_code == 404


class TestCommandEndpoints:
    """Tests for /commands."""

    def test_list_commands(self, api_client: TestClient):
        response = api_client.get("/api/v1/commands")

        names = [c["name"] for c in response.json()]
        assert "check_vault_path" in names
        assert "write_notes" in names

    def test_invoke_round_trip(self, api_client: TestClient, vault: Path):
        written = api_client.post(
            "/api/v1/commands/write_notes",
            json={"vault_path": str(vault), "notes": [NOTE_ROW]},
        )
        read = api_client.post(
            "/api/v1/commands/read_notes", json={"vault_path": str(vault)}
        )

        assert written.json() == {"command": "write_notes", "result": None}
        assert read.json() == {"command": "read_notes", "result": [NOTE_ROW]}

    def test_invoke_check_vault_path(self, api_client: TestClient, vault: Path):
        response = api_client.post(
            "/api/v1/commands/check_vault_path", json={"path": str(vault)}
        )

        assert response.json()["result"] is True

    def test_invoke_check_vault_path_with_integer(self, api_client: TestClient):
        response = api_client.post(
            "/api/v1/commands/check_vault_path", json={"path": 0}
        )

        assert response.json()["result"] is False

    def test_connection_with_string_strength_is_422(
        self, api_client: TestClient, vault: Path
    ):
        response = api_client.put(
            "/api/v1/connections",
            params={"vault_path": str(vault)},
            json=[{**CONNECTION_ROW, "strength": "0.5"}],
        )

        assert response.status_code == 422
        assert not (vault / "connections.json").exists()

    def test_unknown_command_is_404(self, api_client: TestClient):
        response = api_client.post("/api/v1/commands/nope", json={})

        assert response.status_code == 404
        assert response.json() == {"detail": "Unknown command: nope", "kind": "not_found"}

    def test_missing_arguments_is_422(self, api_client: TestClient):
        response = api_client.post("/api/v1/commands/read_notes", json={})

        assert response.status_code == 422
        assert response.json()["kind"] == "parse_error"

    def test_empty_body_means_no_arguments(self, api_client: TestClient):
        response = api_client.post("/api/v1/commands/read_notes")

        assert response.status_code == 422
        assert response.json()["kind"] == "parse_error"
