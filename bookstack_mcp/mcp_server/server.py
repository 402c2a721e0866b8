"""Server lifecycle and StreamableHTTP wiring for MCP server."""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, Optional

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Mount
from starlette.types import Receive, Scope, Send

from bookstack_mcp.gating import FixedWindowRateLimiter, build_gating_middleware
from bookstack_mcp.health import create_health_routes
from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.components import ServerComponents
from bookstack_mcp.mcp_server.mcp_server import create_mcp_server

MCP_MOUNT_PATH = "/mcp"


def create_starlette_app(
    components: ServerComponents,
    logger: Logger,
    limiter: Optional[FixedWindowRateLimiter] = None,
) -> Starlette:
    """Starlette app serving MCP at ``/mcp`` plus the health routes.

    Gating middleware wraps everything; health routes are exempt from it.
    """
    mcp_app = create_mcp_server(components.tool_registry, logger)
    session_manager = StreamableHTTPSessionManager(
        app=mcp_app,
        event_store=None,
        json_response=False,
        stateless=False,
    )

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(starlette_app: Starlette) -> AsyncIterator[None]:
        logger.info("Starting StreamableHTTP session manager")
        try:
            async with session_manager.run():
                logger.info("StreamableHTTP session manager ready")
                yield
        finally:
            await components.aclose()
            logger.info("BookStack client closed")

    routes = create_health_routes(components.health_registry, logger)
    routes.append(Mount(MCP_MOUNT_PATH, app=handle_streamable_http))

    return Starlette(
        routes=routes,
        middleware=build_gating_middleware(components.settings, logger, limiter=limiter),
        lifespan=lifespan,
    )


async def main(
    components: ServerComponents,
    logger: Logger,
    host: str = "0.0.0.0",
    port: int = 8010,
) -> None:
    import uvicorn

    starlette_app = create_starlette_app(components, logger)
    logger.info("Starting BookStack MCP server", host=host, port=port)
    config = uvicorn.Config(
        starlette_app,
        host=host,
        port=port,
        log_level=components.settings.server.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()
