import argparse
import asyncio
import sys
from typing import List, Optional

from bookstack_mcp.exceptions import ConfigurationError
from bookstack_mcp.logger import Logger, server_logger
from bookstack_mcp.mcp_server.components import initialize_components
from bookstack_mcp.startup import add_common_arguments, resolve_settings

logger: Logger = server_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="bookstack-mcp MCP Server - BookStack tools via Model Context Protocol"
    )
    return add_common_arguments(
        parser,
        port_help="Port number to listen on (default: 8010, or BOOKSTACK_MCP_PORT env var)",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args, logger)
    except ConfigurationError as e:
        logger.error("FATAL: Invalid configuration", error=e.message, **e.details)
        return 1

    from bookstack_mcp.mcp_server.server import main as serve

    try:
        components = initialize_components(settings=settings, logger=logger)
        logger.info(
            "Starting MCP server",
            host=settings.server.host,
            port=settings.server.port,
            transport="Streamable HTTP",
        )
        asyncio.run(serve(components, logger, host=settings.server.host, port=settings.server.port))
        logger.info("MCP server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Shutdown complete")
    except Exception as e:
        logger.error("Failed to start server", error=str(e), error_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
