"""Tests for app/core/exception_handlers.py - unified error bodies."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from app.core.exception_handlers import register_exception_handlers
from app.core.exceptions import RateLimitError
from app.gateway.exceptions import GatewayError


class Payload(BaseModel):
    mobile: str


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/rate-limited")
    async def rate_limited():
        raise RateLimitError("slow down", retry_after=17)

    @app.get("/gateway")
    async def gateway():
        raise GatewayError("Messaging gateway error", upstream_body="secret body")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.post("/validate")
    async def validate(payload: Payload):
        return payload

    return app


client = TestClient(build_app(), raise_server_exceptions=False)


def test_rate_limit_sets_retry_after():
    response = client.get("/rate-limited")

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "17"
    assert response.json() == {"type": "rate_limit_exceeded", "message": "slow down"}


def test_gateway_error_hides_upstream_body():
    response = client.get("/gateway")

    assert response.status_code == 502
    assert "secret body" not in response.text


def test_unhandled_is_generic_500():
    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "type": "internal_error",
        "message": "An unexpected error occurred",
    }


def test_validation_error_is_400():
    response = client.post("/validate", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["type"] == "validation_error"
    assert body["message"].startswith("mobile:")


def test_unknown_route():
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["type"] == "http_error"
