"""Test the middleware stack implementation."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from error_capture.core.config import Settings
from error_capture.presentation.middleware import setup_middleware


def _app(settings: Settings) -> FastAPI:
    app = FastAPI()

    @app.get("/ok")
    async def ok():
        return {"message": "ok"}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("route exploded")

    setup_middleware(app, settings)
    return app


def test_request_id_is_generated_and_echoed():
    client = TestClient(_app(Settings(_env_file=None)))

    response = client.get("/ok")
    assert response.status_code == 200
    assert response.headers["X-Request-ID"]

    response = client.get("/ok", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_unhandled_exception_becomes_500_without_container():
    client = TestClient(_app(Settings(_env_file=None, ENVIRONMENT="development")))

    response = client.get("/boom", headers={"X-Request-ID": "req-1"})

    assert response.status_code == 500
    body = response.json()
    assert body["error_code"] == "INTERNAL_ERROR"
    assert body["request_id"] == "req-1"
    assert body["details"]["error_type"] == "RuntimeError"
    assert response.headers["X-Request-ID"] == "req-1"


def test_production_hides_exception_details():
    client = TestClient(_app(Settings(_env_file=None, ENVIRONMENT="production")))

    body = client.get("/boom").json()

    assert "details" not in body
    assert body["message"] == "Internal server error"
