"""BookStack MCP web server - plain HTTP surface over the tool registry.

Exposes the same tools as the MCP transport for debugging and scripting:
- GET /ping - liveness without touching BookStack
- GET /tools - tool names, descriptions and input schemas
- POST /invoke/{name} - dispatch one tool with a JSON object of arguments
- GET /health, /health/ready, /health/live - health surfaces

The gating middleware (throttle, then auth gate) wraps every route except
the health routes.
"""

import contextlib
import json
from datetime import datetime
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bookstack_mcp.gating import FixedWindowRateLimiter, build_gating_middleware
from bookstack_mcp.health import create_health_routes
from bookstack_mcp.logger import Logger, server_logger
from bookstack_mcp.mcp_server.components import ServerComponents
from bookstack_mcp.mcp_server.invocation import FailureKind, InvocationFailure
from bookstack_mcp.mcp_server.responses import result_body

SERVICE_NAME = "bookstack-mcp-web"

FAILURE_STATUS: Dict[FailureKind, int] = {
    FailureKind.NOT_FOUND: 404,
    FailureKind.BAD_REQUEST: 400,
    FailureKind.INTERNAL_ERROR: 502,
}


class BookStackWebServer:
    """FastAPI server for inspecting and invoking tools over plain HTTP."""

    def __init__(
        self,
        components: ServerComponents,
        logger: Optional[Logger] = None,
        limiter: Optional[FixedWindowRateLimiter] = None,
    ):
        """
        Initialize the web server.

        Args:
            components: Shared server components (client, registries)
            logger: Logger, defaults to the shared server logger
            limiter: Optional pre-built rate limiter (tests inject one with their own limits)
        """
        self.components = components
        self.registry = components.tool_registry
        self.logger: Logger = logger or server_logger

        @contextlib.asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            try:
                yield
            finally:
                await components.aclose()
                self.logger.info("BookStack client closed")

        self.app = FastAPI(
            title="bookstack-mcp",
            description="HTTP debugging surface for the BookStack MCP tools",
            middleware=build_gating_middleware(components.settings, self.logger, limiter=limiter),
            lifespan=lifespan,
        )
        self.app.router.routes.extend(create_health_routes(components.health_registry, self.logger))

        self.logger.info(
            "Web server initialized",
            tools=len(self.registry),
            endpoints=["ping", "tools", "invoke", "health"],
        )
        self._setup_routes()

    def _setup_routes(self) -> None:
        @self.app.get("/ping")
        async def ping():
            """
            Liveness endpoint that never calls BookStack.

            Returns:
                {status: "ok", timestamp: ISO8601, service: "bookstack-mcp-web"}
            """
            current_time = datetime.now().isoformat()
            self.logger.info("GET /ping", timestamp=current_time)
            return JSONResponse(
                content={"status": "ok", "timestamp": current_time, "service": SERVICE_NAME}
            )

        @self.app.get("/tools")
        async def list_tools():
            """List registered tools with their input schemas."""
            tools = self.registry.list_tools()
            self.logger.info("GET /tools", count=len(tools))
            return JSONResponse(
                content={
                    "status": "success",
                    "data": [
                        {
                            "name": tool.name,
                            "description": tool.description,
                            "inputSchema": tool.input_schema,
                        }
                        for tool in tools
                    ],
                }
            )

        @self.app.post("/invoke/{tool_name}")
        async def invoke_tool(tool_name: str, request: Request):
            """Dispatch one tool; the JSON body is the argument object."""
            arguments = await self._read_arguments(request)
            if isinstance(arguments, InvocationFailure):
                return JSONResponse(status_code=400, content=arguments.to_dict())

            self.logger.info("POST /invoke", tool=tool_name, args_keys=list(arguments.keys()))
            result = await self.registry.dispatch(tool_name, arguments)
            if isinstance(result, InvocationFailure):
                status = FAILURE_STATUS[result.kind]
                self.logger.info("/invoke failed", tool=tool_name, error=result.kind.value, status=status)
                return JSONResponse(status_code=status, content=result.to_dict())

            self.logger.info("/invoke completed", tool=tool_name, status=200)
            return JSONResponse(content=result_body(result))

    async def _read_arguments(self, request: Request) -> Any:
        body = await request.body()
        if not body.strip():
            return {}
        try:
            arguments = json.loads(body)
        except ValueError as exc:
            self.logger.warning("/invoke body is not valid JSON", error=str(exc))
            return InvocationFailure(
                kind=FailureKind.BAD_REQUEST,
                message=f"Request body is not valid JSON: {exc}",
                recovery_strategy="Send a JSON object mapping parameter names to values.",
            )
        if not isinstance(arguments, dict):
            return InvocationFailure(
                kind=FailureKind.BAD_REQUEST,
                message="Request body must be a JSON object of tool arguments",
                recovery_strategy="Send a JSON object mapping parameter names to values.",
            )
        return arguments
