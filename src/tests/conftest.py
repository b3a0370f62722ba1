"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import notevault.api.middleware as middleware
from notevault.api.app import create_app
from notevault.core.commands import CommandRegistry, set_command_registry
from notevault.core.types import Connection, Note


@pytest.fixture
def vault(tmp_path):
    """Provide an empty vault folder."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def notes_file(vault):
    """Path of the notes collection inside the vault."""
    return vault / "notes.json"


@pytest.fixture
def connections_file(vault):
    """Path of the connections collection inside the vault."""
    return vault / "connections.json"


@pytest.fixture
def sample_note():
    """A single note as the desktop front-end sends it."""
    return Note(
        id="1",
        content="hello",
        created_at="2024-01-01T00:00:00Z",
        updated_at=None,
    )


@pytest.fixture
def sample_notes():
    """Several notes in a deliberate, non-sorted order."""
    return [
        Note(id="b", content="second letter", created_at="2024-01-02T00:00:00Z"),
        Note(
            id="a",
            content="first letter\nwith two lines",
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-03T09:30:00Z",
        ),
        Note(id="c", content="zażółć gęślą jaźń", created_at="2024-01-04T00:00:00Z"),
    ]


@pytest.fixture
def sample_connection():
    """A connection between two sample notes."""
    return Connection(
        id="c1",
        source_id="a",
        target_id="b",
        strength=0.75,
        type_name="manual",
        created_at="2024-01-05T00:00:00Z",
    )


@pytest.fixture
def registry():
    """Install a fresh command registry for the test."""
    fresh = CommandRegistry()
    set_command_registry(fresh)
    yield fresh
    set_command_registry(None)


@pytest.fixture
def no_auth(monkeypatch):
    """Run the API without an API key."""
    monkeypatch.setattr(middleware, "NOTEVAULT_API_KEY", None)
    monkeypatch.setattr(middleware, "NOTEVAULT_ALLOW_NO_AUTH", True)


@pytest.fixture
def api_client(no_auth, registry):
    """TestClient for a fresh app with authentication disabled."""
    with TestClient(create_app()) as client:
        yield client
