"""MCP server response helpers.

This module holds low-level helpers used by routing and the HTTP debugging
surface:
- JSON serialization helpers
- rendering of InvocationResult values as MCP text content
"""

from __future__ import annotations

import json
from typing import Any

from mcp.types import TextContent

from bookstack_mcp.mcp_server.invocation import InvocationFailure, InvocationResult
from bookstack_mcp.mcp_server.tool_types import ToolResponse


def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for non-standard types."""
    # Handle Pydantic models
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    # Handle dataclasses and regular objects
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    # Fallback
    return str(obj)


def to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=True, default=_json_serializer)


def _json_text(payload: Any) -> TextContent:
    return TextContent(type="text", text=to_json(payload))


def result_body(result: InvocationResult) -> Any:
    """JSON-ready body: the payload itself on success, the error object otherwise."""
    if isinstance(result, InvocationFailure):
        return result.to_dict()
    return result.payload


def render_result(result: InvocationResult) -> ToolResponse:
    return [_json_text(result_body(result))]
