"""BookStack wiki API exposed as MCP tools behind an auth gate and rate limiter."""

__version__ = "0.1.0"
