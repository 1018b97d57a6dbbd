import pytest
from fastapi.testclient import TestClient

from cletools.app.main import app
from cletools.app.config.settings import settings
from cletools.app.domain.tools.registry import ToolRegistry


@pytest.fixture
def registry():
    return ToolRegistry()


@pytest.fixture
def properties_file(tmp_path, monkeypatch):
    """Point the service at a properties file under tmp_path (absent until written)."""
    path = tmp_path / "cletools.toml"
    monkeypatch.setattr(settings, "cle_properties_file", str(path))
    monkeypatch.setattr(settings, "cle_properties", {})
    return path


@pytest.fixture
def client(properties_file, monkeypatch):
    monkeypatch.setattr(app.state, "tool_registry", ToolRegistry())
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
