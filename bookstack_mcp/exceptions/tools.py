"""Tool registry and dispatch exceptions."""

from typing import Any, Dict, List, Optional

from .base import BookStackMcpError


class ToolNotFoundError(BookStackMcpError):
    """Raised when a tool name is not present in the registry."""

    def __init__(self, tool_name: str, available: Optional[List[str]] = None):
        super().__init__(
            code="NOT_FOUND",
            message=f"Tool '{tool_name}' does not exist in this service.",
            details={"tool": tool_name},
        )
        self.tool_name = tool_name
        self.available = available or []


class InvalidArgumentError(BookStackMcpError):
    """Raised when a parameter is missing or cannot be converted."""

    def __init__(self, parameter: str, message: str, details: Optional[Dict[str, Any]] = None):
        merged = {"parameter": parameter}
        merged.update(details or {})
        super().__init__(code="BAD_REQUEST", message=message, details=merged)
        self.parameter = parameter


class DuplicateToolError(BookStackMcpError):
    """Raised when two tools are registered under the same name."""

    def __init__(self, tool_name: str):
        super().__init__(
            code="DUPLICATE_TOOL",
            message=f"Tool '{tool_name}' is already registered.",
            details={"tool": tool_name},
        )
        self.tool_name = tool_name
