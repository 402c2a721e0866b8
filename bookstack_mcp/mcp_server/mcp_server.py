"""BookStack MCP server.

Every tool is a thin forwarding call to the BookStack REST API. Tool lookup,
argument binding and error mapping live in the ToolRegistry; this module only
adapts it to the MCP ``list_tools``/``call_tool`` handlers. The SDK does not
validate arguments against ``inputSchema``; binding failures come back as
BAD_REQUEST payloads from the registry.

Authentication and rate limiting are enforced by the HTTP transport in front
of the session manager (see ``bookstack_mcp.gating``), not per tool.
"""

from __future__ import annotations

from typing import Any, Dict, List

from mcp.server import Server
from mcp.types import Tool

from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.routing import dispatch_tool_call
from bookstack_mcp.mcp_server.tool_registry import ToolDescriptor, ToolRegistry
from bookstack_mcp.mcp_server.tool_types import ToolResponse

SERVER_NAME = "bookstack-mcp"


def to_mcp_tool(descriptor: ToolDescriptor) -> Tool:
    return Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def create_mcp_server(registry: ToolRegistry, logger: Logger) -> Server:
    app: Server = Server(SERVER_NAME)

    @app.list_tools()
    async def handle_list_tools() -> List[Tool]:
        return [to_mcp_tool(tool) for tool in registry.list_tools()]

    @app.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> ToolResponse:
        return await dispatch_tool_call(
            name=name, arguments=arguments, registry=registry, logger=logger
        )

    logger.info("MCP server created", name=SERVER_NAME, tools=len(registry))
    return app
