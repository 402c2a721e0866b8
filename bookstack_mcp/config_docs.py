"""Centralized configuration documentation and defaults for the bookstack-mcp service.

This module provides a comprehensive overview of all configuration options
and their environment variable mappings.
"""

# =============================================================================
# ENVIRONMENT VARIABLES REFERENCE
# =============================================================================

# Upstream BookStack API
# ----------------------
# BOOKSTACK_BASE_URL: Base URL of the BookStack instance (required)
#   Example: https://wiki.example.com
# BOOKSTACK_TOKEN_ID: API token id (Settings > Users > API Tokens)
# BOOKSTACK_TOKEN_SECRET: API token secret
#
# Application Ports
# -----------------
# BOOKSTACK_MCP_HOST: Bind address for both servers (default: 0.0.0.0)
# BOOKSTACK_MCP_PORT: MCP server port (default: 8010)
# BOOKSTACK_MCP_WEB_PORT: HTTP debugging server port (default: 8012)
#
# Authentication Gate
# -------------------
# BOOKSTACK_MCP_AUTH_HEADER_NAME: Header every request must carry (e.g. X-Auth-Token)
# BOOKSTACK_MCP_AUTH_HEADER_VALUE: Exact value the header must have
#   The gate is disabled unless BOTH are set.
#
# Throttling
# ----------
# BOOKSTACK_MCP_THROTTLING_ENABLED: Enable per-client rate limiting (default: true)
# BOOKSTACK_MCP_THROTTLING_PERMIT_LIMIT: Requests per window per client (default: 100)
# BOOKSTACK_MCP_THROTTLING_WINDOW_SECONDS: Window length (default: 60)
# BOOKSTACK_MCP_THROTTLING_QUEUE_LIMIT: Requests allowed to wait for the next window (default: 0)
#
# Tools & Health
# --------------
# BOOKSTACK_MCP_ENABLE_WRITE_TOOLS: Expose create/delete tools (default: true)
# BOOKSTACK_MCP_HEALTH_TIMEOUT: Upstream probe timeout in seconds (default: 5)
#
# Development
# -----------
# BOOKSTACK_MCP_CONFIG: Path to a YAML configuration file
# BOOKSTACK_MCP_LOG_LEVEL: Logging verbosity (default: INFO)
#   Values: DEBUG, INFO, WARNING, ERROR, CRITICAL

# =============================================================================
# CONFIGURATION DEFAULTS
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_MCP_PORT = 8010
DEFAULT_WEB_PORT = 8012
DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_PERMIT_LIMIT = 100
DEFAULT_WINDOW_SECONDS = 60
DEFAULT_QUEUE_LIMIT = 0

DEFAULT_HEALTH_TIMEOUT_SECONDS = 5.0

# Paging defaults applied by list/search tools
DEFAULT_PAGE_OFFSET = 0
DEFAULT_PAGE_COUNT = 50

# (environment variable, settings section, settings field)
ENVIRONMENT_MAPPING = [
    ("BOOKSTACK_BASE_URL", "bookstack", "base_url"),
    ("BOOKSTACK_TOKEN_ID", "bookstack", "token_id"),
    ("BOOKSTACK_TOKEN_SECRET", "bookstack", "token_secret"),
    ("BOOKSTACK_MCP_AUTH_HEADER_NAME", "security", "auth_header_name"),
    ("BOOKSTACK_MCP_AUTH_HEADER_VALUE", "security", "auth_header_value"),
    ("BOOKSTACK_MCP_THROTTLING_ENABLED", "throttling", "enabled"),
    ("BOOKSTACK_MCP_THROTTLING_PERMIT_LIMIT", "throttling", "permit_limit"),
    ("BOOKSTACK_MCP_THROTTLING_WINDOW_SECONDS", "throttling", "window_seconds"),
    ("BOOKSTACK_MCP_THROTTLING_QUEUE_LIMIT", "throttling", "queue_limit"),
    ("BOOKSTACK_MCP_HOST", "server", "host"),
    ("BOOKSTACK_MCP_PORT", "server", "port"),
    ("BOOKSTACK_MCP_WEB_PORT", "server", "web_port"),
    ("BOOKSTACK_MCP_ENABLE_WRITE_TOOLS", "server", "enable_write_tools"),
    ("BOOKSTACK_MCP_HEALTH_TIMEOUT", "server", "health_timeout_seconds"),
    ("BOOKSTACK_MCP_LOG_LEVEL", "server", "log_level"),
]

CONFIG_PATH_ENV = "BOOKSTACK_MCP_CONFIG"

# =============================================================================
# CONFIGURATION HELPER FUNCTIONS
# =============================================================================


def get_config_summary(settings) -> dict:
    """Get a loggable summary of the effective configuration.

    Secrets are reported as set/unset only.

    Args:
        settings: AppSettings instance

    Returns:
        Dictionary with current configuration values
    """
    return {
        "bookstack_base_url": settings.bookstack.base_url,
        "bookstack_token_set": bool(settings.bookstack.token_id and settings.bookstack.token_secret),
        "auth_gate_enabled": settings.security.enabled,
        "auth_header_name": settings.security.auth_header_name,
        "throttling_enabled": settings.throttling.enabled,
        "permit_limit": settings.throttling.permit_limit,
        "window_seconds": settings.throttling.window_seconds,
        "queue_limit": settings.throttling.queue_limit,
        "write_tools_enabled": settings.server.enable_write_tools,
        "health_timeout_seconds": settings.server.health_timeout_seconds,
        "log_level": settings.server.log_level,
    }


def print_configuration_help() -> None:
    """Print environment variable reference to stdout."""
    print("bookstack-mcp configuration (environment variables):")
    for env_var, section, field in ENVIRONMENT_MAPPING:
        print(f"  {env_var:<42} -> {section}.{field}")
    print(f"  {CONFIG_PATH_ENV:<42} -> path to YAML configuration file")
