"""Settings resolution for the command-line entry points.

Combines the YAML file, environment variables and CLI flags into validated
AppSettings, and applies the configured log level to the shared logger.
"""

from argparse import ArgumentParser, Namespace
from typing import Any, Dict, Mapping, Optional

from bookstack_mcp.config import AppSettings, load_settings, require_upstream
from bookstack_mcp.config_docs import get_config_summary
from bookstack_mcp.logger import ConsoleLogger, Logger


def add_common_arguments(parser: ArgumentParser, port_help: str) -> ArgumentParser:
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address to bind to (default: 0.0.0.0, or BOOKSTACK_MCP_HOST env var)",
    )
    parser.add_argument("--port", type=int, default=None, help=port_help)
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file (default: BOOKSTACK_MCP_CONFIG env var)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Expose only the read tools (no create/delete)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level: DEBUG, INFO, WARNING, ERROR (default: INFO)",
    )
    return parser


def cli_overrides(args: Namespace, port_field: str = "port") -> Dict[str, Dict[str, Any]]:
    server: Dict[str, Any] = {
        "host": args.host,
        port_field: args.port,
        "log_level": args.log_level,
    }
    if args.read_only:
        server["enable_write_tools"] = False
    return {"server": server}


def resolve_settings(
    args: Namespace,
    logger: Logger,
    port_field: str = "port",
    environ: Optional[Mapping[str, str]] = None,
) -> AppSettings:
    """
    Resolve effective settings for a server entry point.

    Args:
        args: Parsed CLI arguments (see add_common_arguments)
        logger: Logger; a ConsoleLogger is switched to the configured level
        port_field: ``port`` for the MCP server, ``web_port`` for the web server
        environ: Environment override (tests)

    Raises:
        ConfigurationError: Settings are invalid or BookStack is not configured
    """
    settings = load_settings(
        config_path=args.config,
        environ=environ,
        overrides=cli_overrides(args, port_field),
    )
    require_upstream(settings)
    if isinstance(logger, ConsoleLogger):
        logger.set_level(settings.server.log_level)
    logger.info("Configuration resolved", **get_config_summary(settings))
    return settings
