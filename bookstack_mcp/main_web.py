import argparse
import sys
from typing import List, Optional

import uvicorn

from bookstack_mcp.exceptions import ConfigurationError
from bookstack_mcp.logger import Logger, server_logger
from bookstack_mcp.mcp_server.components import initialize_components
from bookstack_mcp.startup import add_common_arguments, resolve_settings
from bookstack_mcp.web_server import BookStackWebServer

logger: Logger = server_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="bookstack-mcp Web Server - HTTP debugging surface for the BookStack tools"
    )
    return add_common_arguments(
        parser,
        port_help="Port number to listen on (default: 8012, or BOOKSTACK_MCP_WEB_PORT env var)",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args, logger, port_field="web_port")
    except ConfigurationError as e:
        logger.error("FATAL: Invalid configuration", error=e.message, **e.details)
        return 1

    try:
        components = initialize_components(settings=settings, logger=logger)
        server = BookStackWebServer(components, logger=logger)
        logger.info(
            "Starting web server",
            host=settings.server.host,
            port=settings.server.web_port,
            transport="HTTP REST API",
        )
        uvicorn.run(
            server.app,
            host=settings.server.host,
            port=settings.server.web_port,
            log_level=settings.server.log_level.lower(),
        )
        logger.info("Web server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Web server stopped by user")
    except Exception as e:
        logger.error("Failed to start web server", error=str(e), error_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
