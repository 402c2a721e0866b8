"""Tests for the ASGI gating pipeline: throttle, then auth gate, then app."""

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from bookstack_mcp.config import ThrottlingSettings
from bookstack_mcp.gating import (
    REJECTION_BODY,
    FixedWindowRateLimiter,
    build_gating_middleware,
    client_key_from_scope,
)

HEADER = "X-MCP-Auth"
SECRET = "pipeline-secret"


async def echo(request: Request) -> PlainTextResponse:
    return PlainTextResponse("ok")


def make_app(settings, logger, limiter=None) -> Starlette:
    return Starlette(
        routes=[
            Route("/echo", echo, methods=["GET", "POST"]),
            Route("/health/live", echo),
        ],
        middleware=build_gating_middleware(settings, logger, limiter=limiter),
    )


@pytest.fixture
def gated_settings(settings_factory):
    return settings_factory(
        security={"auth_header_name": HEADER, "auth_header_value": SECRET},
        throttling={"permit_limit": 2, "window_seconds": 60},
    )


class TestPipeline:
    def test_authorized_request_reaches_app(self, gated_settings, logger):
        client = TestClient(make_app(gated_settings, logger))
        response = client.get("/echo", headers={HEADER: SECRET})
        assert response.status_code == 200
        assert response.text == "ok"

    def test_missing_header_returns_401(self, gated_settings, logger):
        client = TestClient(make_app(gated_settings, logger))
        response = client.get("/echo")
        assert response.status_code == 401
        assert response.text == "Unauthorized: Missing authentication header"
        assert response.headers["content-type"].startswith("text/plain")

    def test_invalid_header_returns_401(self, gated_settings, logger):
        client = TestClient(make_app(gated_settings, logger))
        response = client.get("/echo", headers={HEADER: "wrong"})
        assert response.status_code == 401
        assert response.text == "Unauthorized: Invalid authentication header"

    def test_unauthenticated_requests_consume_permits(self, gated_settings, logger):
        """Throttle runs before the auth gate."""
        client = TestClient(make_app(gated_settings, logger))
        assert client.get("/echo").status_code == 401
        assert client.get("/echo").status_code == 401

        response = client.get("/echo", headers={HEADER: SECRET})
        assert response.status_code == 429
        assert response.text == REJECTION_BODY

    def test_health_routes_bypass_gating(self, gated_settings, logger):
        client = TestClient(make_app(gated_settings, logger))
        for _ in range(5):
            assert client.get("/health/live").status_code == 200

    def test_throttling_disabled_builds_no_limiter(self, settings_factory, logger):
        settings = settings_factory(throttling={"enabled": False, "permit_limit": 1})
        stack = build_gating_middleware(settings, logger)
        assert len(stack) == 1

        client = TestClient(make_app(settings, logger))
        for _ in range(5):
            assert client.get("/echo").status_code == 200

    def test_open_gate_when_security_unset(self, settings, logger):
        client = TestClient(make_app(settings, logger))
        assert client.get("/echo").status_code == 200

    def test_injected_limiter_is_used(self, gated_settings, logger):
        limiter = FixedWindowRateLimiter(ThrottlingSettings(permit_limit=1), logger)
        client = TestClient(make_app(gated_settings, logger, limiter=limiter))
        headers = {HEADER: SECRET}
        assert client.get("/echo", headers=headers).status_code == 200
        assert client.get("/echo", headers=headers).status_code == 429


class TestClientKey:
    def test_remote_address(self):
        assert client_key_from_scope({"client": ("192.0.2.7", 5555)}) == "192.0.2.7"

    def test_missing_client_is_unknown(self):
        assert client_key_from_scope({}) == "unknown"
        assert client_key_from_scope({"client": None}) == "unknown"
