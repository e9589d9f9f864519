"""Tests for health, root, CORS preflight and error envelopes."""
from unittest.mock import patch


def test_root(client):
    data = client.get("/").json()
    assert data["message"] == "Vaan Sanskrit API"
    assert data["health_check"] == "/health"


def test_basic_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_detailed_health(client, make_lexeme):
    make_lexeme()
    data = client.get("/health/detailed").json()
    assert data["services"]["database"]["status"] == "healthy"
    assert data["services"]["database"]["lexemes"] == 1
    assert data["services"]["llm"]["status"] == "not_configured"
    assert data["services"]["stripe"] == {"live": False, "test": False}


def test_options_returns_204_anywhere(client):
    for path in ("/api/word-of-day", "/api/admin/blog/12", "/does/not/exist"):
        response = client.options(path)
        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"


def test_correlation_id_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc123"})
    assert response.headers["x-correlation-id"] == "abc123"


def test_error_envelope_has_correlation_id(client):
    response = client.get("/api/baby-names/nobody", headers={"X-Correlation-ID": "req-1"})
    assert response.status_code == 404
    assert response.json() == {"detail": "Baby name not found", "correlation_id": "req-1"}


def test_unhandled_error_is_generic_500(make_baby_name):
    from fastapi.testclient import TestClient
    from app.main import app

    make_baby_name()
    client = TestClient(app, raise_server_exceptions=False)
    with patch("app.routes.baby_names.format_baby_name", side_effect=RuntimeError("secret internals")):
        response = client.get("/api/baby-names")
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    assert "secret internals" not in response.text
