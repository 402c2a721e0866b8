"""Base exception classes for the bookstack-mcp application.

All exceptions carry a machine-readable ``code``, a human-readable
``message`` and an optional ``details`` mapping, so they can be turned into
structured error payloads for MCP clients without losing context.
"""

from typing import Any, Dict, Optional


class BookStackMcpError(Exception):
    """Root of the project exception hierarchy."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(BookStackMcpError):
    """Raised when settings are missing or invalid at startup."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CONFIGURATION_ERROR", message=message, details=details)
