"""Gateway header extraction and local gateway shim tests."""

import json
import logging

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from src.config import Settings, get_settings
from src.database import get_db
from src.logging_config import bind_context, clear_context, configure_logging, format_json
from src.main import create_catalogue_app
from src.shared.gateway import parse_gateway_headers
from src.shared.tokens import create_access_token


@pytest.mark.parametrize(
    "user_id, email, expected",
    [
        ("42", "cook@example.com", 42),
        (" 42 ", None, 42),
        ("abc", "cook@example.com", None),
        ("0", "cook@example.com", None),
        ("-5", "cook@example.com", None),
        ("2147483648", "cook@example.com", None),
        ("100000000000000000000", "cook@example.com", None),
        ("", "cook@example.com", None),
        (None, None, None),
    ],
)
def test_parse_gateway_headers(user_id, email, expected):
    """Test only positive integer user IDs produce a principal."""
    principal = parse_gateway_headers(user_id, email)
    if expected is None:
        assert principal is None
    else:
        assert principal.user_id == expected


@pytest.mark.parametrize("user_id", ["abc", "0", "-1", "1.5", "100000000000000000000"])
def test_malformed_user_header_is_unauthenticated(client, user_id):
    """Test a malformed X-User-Id is treated as no principal."""
    response = client.post(
        "/recipes",
        headers={"X-User-Id": user_id, "X-User-Email": "cook@example.com"},
        json={"name": "Nope"},
    )
    assert response.status_code == 401


def test_request_id_is_echoed(client):
    """Test an incoming request ID is returned, or one is generated."""
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_catalogue_health(client):
    """Test the catalogue health endpoint."""
    response = client.get("/health")
    assert response.json() == {"status": "healthy", "service": "recipe-catalogue"}


def test_unknown_route_uses_error_envelope(client):
    """Test framework 404s share the error envelope."""
    response = client.get("/no-such-route")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"
    assert response.json()["code"] == 404


@pytest.fixture
def json_log_lines():
    """Capture JSON log lines emitted while the test runs."""
    configure_logging("test-service")
    lines: list[str] = []
    sink_id = logger.add(lines.append, format=format_json, level="DEBUG")
    yield lines
    logger.remove(sink_id)
    clear_context()


def test_json_log_lines_carry_request_context(json_log_lines):
    """Test standard library records pick up the bound request context."""
    bind_context(request_id="req-abc")
    logging.getLogger("tests.gateway").info("Request completed")

    [line] = json_log_lines
    payload = json.loads(line)
    assert payload["msg"] == "Request completed"
    assert payload["request_id"] == "req-abc"
    assert payload["service"] == "test-service"
    assert payload["level"] == "INFO"
    assert "user_id" not in payload


def test_json_log_lines_include_bound_fields(json_log_lines):
    """Test fields bound on a single call land in that line only."""
    logger.bind(status=200, duration_ms=1.5).warning("Request completed")
    logger.info("Next")

    first, second = (json.loads(line) for line in json_log_lines)
    assert first["status"] == 200
    assert first["duration_ms"] == 1.5
    assert first["level"] == "WARNING"
    assert "status" not in second


def test_request_log_includes_user_id(client, auth_headers, json_log_lines):
    """Test the completion line of an authenticated request names the caller."""
    client.get("/recipes", headers={**auth_headers, "X-Request-ID": "req-log"})

    completed = [json.loads(line) for line in json_log_lines]
    completed = [p for p in completed if p["msg"] == "Request completed"]
    assert completed[-1]["request_id"] == "req-log"
    assert completed[-1]["user_id"] == auth_headers.user_id
    assert completed[-1]["status"] == 200


@pytest.fixture
def local_client(monkeypatch, db):
    """Catalogue client with the local gateway shim enabled."""
    settings = get_settings().model_copy(update={"local_gateway": True})
    monkeypatch.setattr("src.main.get_settings", lambda: settings)
    app = create_catalogue_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


def test_local_gateway_accepts_bearer_token(local_client, make_user):
    """Test a valid bearer token is turned into a principal."""
    headers = make_user("local@example.com")
    token = create_access_token(headers.user_id, "local@example.com")

    response = local_client.post(
        "/recipes", headers={"Authorization": f"Bearer {token}"}, json={"name": "Local"}
    )
    assert response.status_code == 201
    assert response.json()["owner_user_id"] == headers.user_id


def test_local_gateway_strips_client_headers(local_client, make_user):
    """Test client-supplied X-User-* headers are ignored."""
    headers = make_user("spoof@example.com")

    response = local_client.post("/recipes", headers=headers, json={"name": "Spoofed"})
    assert response.status_code == 401


def test_local_gateway_rejects_bad_scheme(local_client):
    """Test a non-bearer Authorization header is rejected."""
    response = local_client.get("/recipes", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid authorization format"


def test_local_gateway_rejects_invalid_token(local_client):
    """Test a bad bearer token is rejected even on public routes."""
    response = local_client.get("/recipes", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json() == {
        "error": "unauthenticated",
        "code": 401,
        "message": "Invalid or expired token",
    }


def test_local_gateway_allows_anonymous_reads(local_client):
    """Test requests without a token pass through."""
    response = local_client.get("/recipes")
    assert response.status_code == 200


def test_production_rejects_local_gateway():
    """Test the shim cannot be enabled in production."""
    with pytest.raises(ValueError):
        Settings(environment="production", jwt_secret="real-secret", local_gateway=True)
