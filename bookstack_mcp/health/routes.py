"""Starlette routes for the health surfaces.

These routes sit outside the gating pipeline: the throttle and auth gate
exempt the ``/health`` prefix.
"""

import asyncio
import contextlib
from typing import AsyncIterator, List

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from bookstack_mcp.health.models import AggregateHealthReport
from bookstack_mcp.health.registry import HealthCheckRegistry
from bookstack_mcp.logger import Logger


@contextlib.asynccontextmanager
async def disconnect_event(request: Request) -> AsyncIterator[asyncio.Event]:
    """Event set when the client connection goes away.

    Health requests carry no body, so the receive channel is free to watch.
    """
    event = asyncio.Event()

    async def watch() -> None:
        while True:
            message = await request.receive()
            if message["type"] == "http.disconnect":
                event.set()
                return

    watcher = asyncio.ensure_future(watch())
    try:
        yield event
    finally:
        watcher.cancel()
        await asyncio.gather(watcher, return_exceptions=True)


def _respond(report: AggregateHealthReport) -> JSONResponse:
    return JSONResponse(report.to_dict(), status_code=report.http_status)


def create_health_routes(registry: HealthCheckRegistry, logger: Logger) -> List[Route]:
    """Build ``/health``, ``/health/ready`` and ``/health/live``."""

    async def health(request: Request) -> JSONResponse:
        async with disconnect_event(request) as cancelled:
            report = await registry.full(cancel_event=cancelled)
        logger.info("GET /health", status=report.status.value, checks=len(report.entries))
        return _respond(report)

    async def ready(request: Request) -> JSONResponse:
        async with disconnect_event(request) as cancelled:
            report = await registry.readiness(cancel_event=cancelled)
        logger.debug("GET /health/ready", status=report.status.value)
        return _respond(report)

    async def live(request: Request) -> JSONResponse:
        return _respond(await registry.liveness())

    return [
        Route("/health", health, methods=["GET"]),
        Route("/health/ready", ready, methods=["GET"]),
        Route("/health/live", live, methods=["GET"]),
    ]
