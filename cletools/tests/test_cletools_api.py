import json

from fastapi.testclient import TestClient

from cletools.app.api.deps import get_tool_registry
from cletools.app.main import app
from cletools.app.config.settings import settings
from cletools.app.domain.tools.registry import ToolRegistry
from cletools.app.domain.tools.snapshot import DEFAULT_TOOL_LIST


class StubRegistry:
    """Registry stand-in returning a fixed listing."""

    def __init__(self, tool_ids):
        self.tool_ids = tool_ids

    def list_tools(self):
        return self.tool_ids


def test_default_tool_list(client):
    response = client.get("/var/basiclti/cletools")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.text == json.dumps({"toolList": list(DEFAULT_TOOL_LIST)}, separators=(",", ":"))
    tool_list = response.json()["toolList"]
    assert len(tool_list) == 24
    assert tool_list[0] == "sakai.gradebook.gwt.rpc"
    assert tool_list[-1] == "sakai.sections"


def test_json_extension_serves_same_listing(client):
    plain = client.get("/var/basiclti/cletools")
    with_ext = client.get("/var/basiclti/cletools.json")
    assert with_ext.status_code == 200
    assert with_ext.json() == plain.json()


def test_startup_loads_properties_file(properties_file, monkeypatch):
    properties_file.write_text(
        '"sakai.cle.basiclti.tool.list" = ["sakai.chat", "sakai.forums"]\n',
        encoding="utf-8",
    )
    monkeypatch.setattr(app.state, "tool_registry", ToolRegistry())

    with TestClient(app) as c:
        response = c.get("/var/basiclti/cletools")

    assert response.status_code == 200
    assert response.json() == {"toolList": ["sakai.chat", "sakai.forums"]}


def test_env_properties_overlay_file(properties_file, monkeypatch):
    properties_file.write_text(
        '"sakai.cle.basiclti.tool.list" = ["sakai.chat"]\n',
        encoding="utf-8",
    )
    monkeypatch.setattr(settings, "cle_properties", {"sakai.cle.basiclti.tool.list": ["sakai.poll"]})
    monkeypatch.setattr(app.state, "tool_registry", ToolRegistry())

    with TestClient(app) as c:
        response = c.get("/var/basiclti/cletools")

    assert response.json() == {"toolList": ["sakai.poll"]}


def test_empty_tool_list(client):
    client.app.state.tool_registry.load({"sakai.cle.basiclti.tool.list": []})
    response = client.get("/var/basiclti/cletools")
    assert response.status_code == 200
    assert response.json() == {"toolList": []}


def test_listing_follows_reload(client):
    registry = client.app.state.tool_registry
    registry.load({"sakai.cle.basiclti.tool.list": ["sakai.poll", "sakai.chat"]})
    assert client.get("/var/basiclti/cletools").json() == {"toolList": ["sakai.poll", "sakai.chat"]}

    registry.load({})
    assert client.get("/var/basiclti/cletools").json() == {"toolList": list(DEFAULT_TOOL_LIST)}


def test_encoding_failure_returns_500_with_message(client):
    app.dependency_overrides[get_tool_registry] = lambda: StubRegistry(["sakai.chat", 42])

    response = client.get("/var/basiclti/cletools")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert "validation error" in response.text


def test_listing_needs_no_parameters(client):
    response = client.get("/var/basiclti/cletools", params={"ignored": "1"})
    assert response.status_code == 200
