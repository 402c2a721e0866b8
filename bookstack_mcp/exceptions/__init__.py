"""Custom exceptions for the gating pipeline, tool dispatch and upstream client.

All exceptions include messages designed for LLM processing, enabling
clients to recover from errors without reading server logs.
"""

from bookstack_mcp.exceptions.base import BookStackMcpError, ConfigurationError
from bookstack_mcp.exceptions.tools import (
    DuplicateToolError,
    InvalidArgumentError,
    ToolNotFoundError,
)
from bookstack_mcp.exceptions.upstream import BookStackApiError

__all__ = [
    "BookStackMcpError",
    "ConfigurationError",
    "ToolNotFoundError",
    "InvalidArgumentError",
    "DuplicateToolError",
    "BookStackApiError",
]
