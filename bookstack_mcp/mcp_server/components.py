"""Component initialization shared by the MCP and HTTP debugging servers.

Everything a request needs is built once here from validated settings and
handed to the transports explicitly.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import httpx

from bookstack_mcp.client import BookStackClient
from bookstack_mcp.config import AppSettings
from bookstack_mcp.health import READY_TAG, BookStackHealthCheck, HealthCheckRegistry, HealthReport
from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.tool_registry import ToolRegistry
from bookstack_mcp.mcp_server.tools import build_tool_registry

BOOKSTACK_CHECK_NAME = "bookstack_api"


@dataclass
class ServerComponents:
    settings: AppSettings
    client: BookStackClient
    tool_registry: ToolRegistry
    health_registry: HealthCheckRegistry
    health_check: BookStackHealthCheck

    async def aclose(self) -> None:
        await self.client.close()


def initialize_components(
    *,
    settings: AppSettings,
    logger: Logger,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ServerComponents:
    """Initialize all server components.

    Args:
        settings: Validated application settings
        logger: Logger
        transport: Optional httpx transport for the upstream client (tests)
    """
    client = BookStackClient(settings.bookstack, logger, transport=transport)
    tool_registry = build_tool_registry(
        client, logger, enable_write_tools=settings.server.enable_write_tools
    )

    health_check = BookStackHealthCheck(client, logger)
    timeout = settings.server.health_timeout_seconds

    async def probe_bookstack(cancel_event: Optional[asyncio.Event] = None) -> HealthReport:
        return await health_check.probe(timeout=timeout, cancel_event=cancel_event)

    health_registry = HealthCheckRegistry(logger)
    health_registry.register(BOOKSTACK_CHECK_NAME, probe_bookstack, tags=[READY_TAG])

    logger.info(
        "Server components initialized",
        base_url=settings.bookstack.base_url,
        tools=len(tool_registry),
        write_tools=settings.server.enable_write_tools,
    )
    return ServerComponents(
        settings=settings,
        client=client,
        tool_registry=tool_registry,
        health_registry=health_registry,
        health_check=health_check,
    )
