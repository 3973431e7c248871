# tests/test_errors.py

from __future__ import annotations

import importlib

from fastapi.testclient import TestClient

from taskboard import config, main
from taskboard.dependencies import get_project_service


def _failing_client(monkeypatch, is_dev: bool) -> TestClient:
    def _broken():
        raise RuntimeError("postgresql://admin:hunter2@db/internal")

    monkeypatch.setattr(main, "IS_DEV", is_dev)
    main.app.dependency_overrides[get_project_service] = _broken
    return TestClient(main.app, raise_server_exceptions=False)


def test_env_defaults_to_production(monkeypatch) -> None:
    monkeypatch.delenv("ENV", raising=False)
    try:
        importlib.reload(config)
        assert config.ENV == "production"
        assert config.IS_DEV is False
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_unhandled_error_hides_details_outside_development(client, register, monkeypatch) -> None:
    alice = register("Alice")
    failing = _failing_client(monkeypatch, is_dev=False)

    resp = failing.get("/api/projects", headers=alice.headers)

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
    assert "hunter2" not in resp.text


def test_unhandled_error_shows_details_in_development(client, register, monkeypatch) -> None:
    alice = register("Alice")
    failing = _failing_client(monkeypatch, is_dev=True)

    resp = failing.get("/api/projects", headers=alice.headers)

    assert resp.status_code == 500
    assert resp.json()["error"] == "postgresql://admin:hunter2@db/internal"


def test_unknown_route_uses_failure_envelope(client) -> None:
    resp = client.get("/api/nowhere")

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Resource not found"}
