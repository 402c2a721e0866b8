"""MCP tool registry, dispatch and Streamable HTTP transport."""

from bookstack_mcp.mcp_server.binding import (
    ParameterDescriptor,
    ParameterKind,
    bind_arguments,
    optional,
    required,
)
from bookstack_mcp.mcp_server.invocation import (
    FailureKind,
    InvocationFailure,
    InvocationResult,
    InvocationSuccess,
)
from bookstack_mcp.mcp_server.tool_registry import ToolDescriptor, ToolRegistry, ToolRegistryBuilder

__all__ = [
    "ParameterKind",
    "ParameterDescriptor",
    "bind_arguments",
    "required",
    "optional",
    "FailureKind",
    "InvocationFailure",
    "InvocationResult",
    "InvocationSuccess",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolRegistryBuilder",
]
