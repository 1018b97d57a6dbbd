import json
import logging

from fastapi.testclient import TestClient

from cletools.app.core.logging import JSONFormatter
from cletools.app.main import app


def test_health():
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data == {"status": "healthy"}


def test_version():
    client = TestClient(app)
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": "0.1.0"}


def test_response_carries_request_id_and_security_headers():
    client = TestClient(app)
    response = client.get("/health")
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Referrer-Policy"] == "no-referrer"


def test_unknown_route_returns_json_error():
    client = TestClient(app)
    response = client.get("/var/basiclti/nope")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "HTTP_ERROR"
    assert "request_id" in data


def test_cors_kwargs_are_read_only():
    from cletools.app.security.cors import cors_kwargs

    kwargs = cors_kwargs(["https://oae.example.edu"])
    assert kwargs["allow_origins"] == ["https://oae.example.edu"]
    assert kwargs["allow_credentials"] is False
    assert "POST" not in kwargs["allow_methods"]


def test_http_error_log_line_keeps_request_context(caplog):
    client = TestClient(app)
    with caplog.at_level(logging.WARNING, logger="cletools"):
        client.get("/var/basiclti/nope", params={"x": "1"})

    record = next(r for r in caplog.records if r.getMessage() == "HTTPException")
    payload = json.loads(JSONFormatter().format(record))
    assert payload["status_code"] == 404
    assert payload["error_code"] == "HTTP_ERROR"
    assert payload["error_message"] == "Not Found"
    assert payload["path"] == "/var/basiclti/nope"
    assert payload["query"] == "x=1"
    assert payload["method"] == "GET"
    assert payload["request_id"]
