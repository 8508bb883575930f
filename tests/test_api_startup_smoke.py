import importlib
import sys

import pytest
from fastapi.testclient import TestClient

from app.admin_agent import AgentConfigurationError, AgentStartupError


async def _noop():
    return None


def _silence_startup(monkeypatch, main):
    monkeypatch.setattr(main, "_startup_tasks", lambda: None)
    monkeypatch.setattr(main.agent, "start", _noop)
    monkeypatch.setattr(main.agent, "stop", _noop)


def test_root_liveness_returns_ping(monkeypatch):
    from app import main

    _silence_startup(monkeypatch, main)

    with TestClient(main.app) as client:
        response = client.get("/")
        agent_health = client.get("/forest")

    assert response.status_code == 200
    assert response.text == "ping"
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers.get("X-Request-ID")
    assert agent_health.status_code == 204


def test_agent_routes_are_registered_before_app_routes():
    from app import main

    paths = list(main.app.openapi()["paths"])

    assert "/forest/{collection_name}" in paths
    assert paths.index("/forest") < paths.index("/")
    assert set(main.agent.collections) == {"country", "city", "address", "customer", "staff", "payment"}


def test_startup_failure_prevents_serving(monkeypatch):
    from app import main

    async def _failing_start():
        raise AgentStartupError("Admin server rejected /forest/apimaps/hashcheck with status 401")

    monkeypatch.setattr(main, "_startup_tasks", lambda: None)
    monkeypatch.setattr(main.agent, "start", _failing_start)
    monkeypatch.setattr(main.agent, "stop", _noop)

    with pytest.raises(AgentStartupError):
        with TestClient(main.app):
            pass


@pytest.mark.parametrize("missing", ["FOREST_AUTH_SECRET", "FOREST_ENV_SECRET"])
def test_boot_fails_without_forest_secret(monkeypatch, missing):
    from app.core import config

    import app.main  # noqa: F401  garante o módulo original em sys.modules para restaurar depois

    monkeypatch.setenv(missing, "")
    monkeypatch.delitem(sys.modules, "app.main")
    try:
        importlib.reload(config)
        with pytest.raises(AgentConfigurationError):
            importlib.import_module("app.main")
    finally:
        monkeypatch.undo()
        importlib.reload(config)
