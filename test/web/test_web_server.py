"""Tests for the HTTP debugging surface (ping, tool listing, invocation, health)."""

import httpx
import pytest
from fastapi.testclient import TestClient

from bookstack_mcp.mcp_server.components import initialize_components
from bookstack_mcp.web_server import BookStackWebServer

TEST_AUTH_HEADER = "X-MCP-Auth"
TEST_AUTH_VALUE = "web-shared-secret"


@pytest.fixture
def client(components, logger):
    """Create a TestClient for the web server."""
    server = BookStackWebServer(components, logger=logger)
    return TestClient(server.app)


@pytest.fixture
def gated_client(settings_factory, fake_api, logger):
    """Web server with the auth gate enabled."""
    settings = settings_factory(
        security={"auth_header_name": TEST_AUTH_HEADER, "auth_header_value": TEST_AUTH_VALUE}
    )
    components = initialize_components(
        settings=settings, logger=logger, transport=fake_api.transport
    )
    return TestClient(BookStackWebServer(components, logger=logger).app)


class TestPing:
    def test_ping_returns_ok(self, client, fake_api):
        response = client.get("/ping")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "bookstack-mcp-web"
        assert isinstance(data["timestamp"], str) and data["timestamp"]
        assert fake_api.requests == []


class TestToolListing:
    def test_lists_every_registered_tool(self, client, components):
        response = client.get("/tools")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        names = [tool["name"] for tool in data["data"]]
        assert names == components.tool_registry.names

    def test_tool_entries_carry_input_schema(self, client):
        tools = {tool["name"]: tool for tool in client.get("/tools").json()["data"]}
        schema = tools["get_page"]["inputSchema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["id"]


class TestInvoke:
    def test_success_returns_payload(self, client):
        response = client.post("/invoke/get_shelf", json={"id": 5})

        assert response.status_code == 200
        assert response.json()["name"] == "Platform"

    def test_empty_body_means_no_arguments(self, client):
        response = client.post("/invoke/list_books")

        assert response.status_code == 200
        assert response.json()["total"] == 2

    def test_unknown_tool_is_404(self, client):
        response = client.post("/invoke/nope", json={})

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "error"
        assert body["error"] == "NOT_FOUND"

    def test_missing_parameter_is_400(self, client):
        response = client.post("/invoke/get_book", json={})

        assert response.status_code == 400
        assert response.json()["parameter"] == "id"

    def test_invalid_json_is_400(self, client):
        response = client.post(
            "/invoke/get_book",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "not valid JSON" in response.json()["message"]

    def test_non_object_body_is_400(self, client):
        response = client.post("/invoke/get_book", json=[1, 2])

        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"

    def test_upstream_failure_is_502(self, client, fake_api):
        fake_api.fail_next = httpx.Response(500, json={"error": {"message": "boom"}})
        response = client.post("/invoke/list_pages", json={})

        assert response.status_code == 502
        assert response.json()["error"] == "INTERNAL_ERROR"


class TestGatedSurface:
    def test_missing_header_is_401(self, gated_client):
        response = gated_client.get("/tools")

        assert response.status_code == 401
        assert response.text == "Unauthorized: Missing authentication header"

    def test_wrong_header_is_401(self, gated_client):
        response = gated_client.get("/tools", headers={TEST_AUTH_HEADER: "wrong"})

        assert response.status_code == 401
        assert response.text == "Unauthorized: Invalid authentication header"

    def test_correct_header_passes(self, gated_client):
        response = gated_client.get("/ping", headers={TEST_AUTH_HEADER: TEST_AUTH_VALUE})
        assert response.status_code == 200

    def test_health_routes_are_exempt(self, gated_client):
        assert gated_client.get("/health/live").status_code == 200
        assert gated_client.get("/health").json()["status"] == "Healthy"
