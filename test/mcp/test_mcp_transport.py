"""Tests for the MCP server handlers and the Starlette app that hosts them."""

import json

import pytest
from mcp import types
from starlette.testclient import TestClient

from bookstack_mcp.mcp_server.components import initialize_components
from bookstack_mcp.mcp_server.mcp_server import create_mcp_server, to_mcp_tool
from bookstack_mcp.mcp_server.routing import dispatch_tool_call
from bookstack_mcp.mcp_server.server import create_starlette_app

HEADER = "X-MCP-Auth"
SECRET = "transport-secret"


def _text(content) -> str:
    return content[0].text


async def _call(server, name, arguments):
    """Run a tools/call request through the server's registered handler."""
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await handler(request)
    assert result.root.isError is False
    return json.loads(result.root.content[0].text)


class TestRouting:
    @pytest.mark.asyncio
    async def test_success_is_payload_as_indented_json(self, components, logger):
        content = await dispatch_tool_call(
            name="get_book", arguments={"id": 1}, registry=components.tool_registry, logger=logger
        )
        text = _text(content)
        assert json.loads(text)["name"] == "Operations Handbook"
        assert text.startswith("{\n  ")

    @pytest.mark.asyncio
    async def test_unknown_tool_payload(self, components, logger):
        content = await dispatch_tool_call(
            name="drop_database", arguments=None, registry=components.tool_registry, logger=logger
        )
        payload = json.loads(_text(content))
        assert payload["status"] == "error"
        assert payload["error"] == "NOT_FOUND"
        assert payload["tool"] == "drop_database"
        assert "list_books" in payload["recovery_strategy"]

    @pytest.mark.asyncio
    async def test_bad_request_payload_names_parameter(self, components, logger):
        content = await dispatch_tool_call(
            name="get_page", arguments={}, registry=components.tool_registry, logger=logger
        )
        payload = json.loads(_text(content))
        assert payload["error"] == "BAD_REQUEST"
        assert payload["parameter"] == "id"


class TestMcpHandlers:
    def test_tool_conversion(self, components):
        descriptor = components.tool_registry.get("create_chapter")
        tool = to_mcp_tool(descriptor)
        assert tool.name == "create_chapter"
        assert tool.inputSchema["required"] == ["name", "book_id"]

    @pytest.mark.asyncio
    async def test_list_tools_handler(self, components, logger):
        server = create_mcp_server(components.tool_registry, logger)
        handler = server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))

        names = [tool.name for tool in result.root.tools]
        assert names == components.tool_registry.names

    @pytest.mark.asyncio
    async def test_call_tool_handler(self, components, logger):
        server = create_mcp_server(components.tool_registry, logger)
        handler = server.request_handlers[types.CallToolRequest]
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="search_books", arguments={"query": "guide"}),
        )
        result = await handler(request)

        payload = json.loads(result.root.content[0].text)
        assert [b["name"] for b in payload["data"]] == ["Engineering Guide"]

    @pytest.mark.asyncio
    async def test_missing_argument_is_bad_request_payload(self, components, logger):
        server = create_mcp_server(components.tool_registry, logger)
        payload = await _call(server, "get_page", {})

        assert payload["status"] == "error"
        assert payload["error"] == "BAD_REQUEST"
        assert payload["parameter"] == "id"

    @pytest.mark.asyncio
    async def test_numeric_string_argument_is_converted(self, components, logger, fake_api):
        server = create_mcp_server(components.tool_registry, logger)
        payload = await _call(server, "get_book", {"id": "1"})

        assert payload["name"] == "Operations Handbook"
        assert fake_api.last_request().url.path == "/api/books/1"

    @pytest.mark.asyncio
    async def test_unconvertible_argument_names_parameter(self, components, logger, fake_api):
        server = create_mcp_server(components.tool_registry, logger)
        payload = await _call(server, "list_books", {"count": "lots"})

        assert payload["error"] == "BAD_REQUEST"
        assert payload["parameter"] == "count"
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_unknown_tool_is_not_found_payload(self, components, logger):
        server = create_mcp_server(components.tool_registry, logger)
        payload = await _call(server, "drop_database", {})

        assert payload["error"] == "NOT_FOUND"


class TestStarletteApp:
    @pytest.fixture
    def app_client(self, settings_factory, fake_api, logger):
        settings = settings_factory(
            security={"auth_header_name": HEADER, "auth_header_value": SECRET},
        )
        components = initialize_components(
            settings=settings, logger=logger, transport=fake_api.transport
        )
        return TestClient(create_starlette_app(components, logger))

    def test_mcp_requires_auth_header(self, app_client):
        response = app_client.post("/mcp/", json={})
        assert response.status_code == 401
        assert response.text == "Unauthorized: Missing authentication header"

    def test_health_is_not_gated(self, app_client):
        response = app_client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "Healthy"
