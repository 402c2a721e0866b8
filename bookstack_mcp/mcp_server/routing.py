"""Tool routing and dispatch for MCP server."""

from __future__ import annotations

from typing import Any, Dict, Optional

from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.invocation import InvocationFailure
from bookstack_mcp.mcp_server.responses import render_result
from bookstack_mcp.mcp_server.tool_registry import ToolRegistry
from bookstack_mcp.mcp_server.tool_types import ToolResponse


async def dispatch_tool_call(
    *,
    name: str,
    arguments: Optional[Dict[str, Any]],
    registry: ToolRegistry,
    logger: Logger,
) -> ToolResponse:
    arguments = arguments or {}
    logger.info("Tool invocation started", tool=name, args_keys=list(arguments.keys()))

    result = await registry.dispatch(name, arguments)
    if isinstance(result, InvocationFailure):
        logger.info("Tool invocation failed", tool=name, error=result.kind.value)
    else:
        logger.info("Tool completed successfully", tool=name)
    return render_result(result)
