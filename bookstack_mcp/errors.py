"""Map project exceptions to structured error payloads for MCP clients."""

from typing import Any, Dict

from bookstack_mcp.exceptions import (
    BookStackApiError,
    BookStackMcpError,
    InvalidArgumentError,
    ToolNotFoundError,
)

RECOVERY_STRATEGIES: Dict[str, str] = {
    "NOT_FOUND": "Call list_tools() to see available tools. Check for typos in the tool name.",
    "BAD_REQUEST": (
        "Check the tool's inputSchema for required parameters and their types, "
        "correct your input, and retry."
    ),
    "UPSTREAM_ERROR": (
        "The BookStack API rejected the request. Verify the ids and values you passed "
        "exist and that the configured API token has permission for this operation."
    ),
    "INTERNAL_ERROR": "Check server logs for details and retry the request.",
    "CONFIGURATION_ERROR": "Fix the server configuration and restart the service.",
}


def recovery_for(code: str) -> str:
    return RECOVERY_STRATEGIES.get(code, RECOVERY_STRATEGIES["INTERNAL_ERROR"])


def map_error_for_mcp(exc: BookStackMcpError) -> Dict[str, Any]:
    """Convert a project exception into ``{error, message, recovery_strategy, ...}``.

    Exception ``details`` are flattened into the payload so that contextual
    fields (offending tool, parameter, status code) sit at the top level.
    """
    payload: Dict[str, Any] = {
        "error": exc.code,
        "message": exc.message,
        "recovery_strategy": recovery_for(exc.code),
    }
    if isinstance(exc, ToolNotFoundError) and exc.available:
        payload["recovery_strategy"] = (
            f"Available tools: {', '.join(exc.available)}. " + recovery_for(exc.code)
        )
    elif isinstance(exc, InvalidArgumentError):
        payload["recovery_strategy"] = f"Fix parameter '{exc.parameter}'. " + recovery_for(exc.code)
    elif isinstance(exc, BookStackApiError) and exc.status_code == 404:
        payload["recovery_strategy"] = (
            "The requested BookStack item does not exist. List the entity type to find a valid id."
        )
    for key, value in exc.details.items():
        payload.setdefault(key, value)
    return payload
