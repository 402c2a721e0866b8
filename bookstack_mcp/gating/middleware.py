"""ASGI middleware that places the throttle and the auth gate in front of an app.

Order per request is fixed: throttle, then auth gate, then the wrapped app.
Unauthenticated requests therefore consume rate-limit permits. Health routes
bypass both.

Both classes are plain ASGI callables rather than ``BaseHTTPMiddleware`` so
that streamed MCP responses pass through untouched.
"""

from typing import List, Optional, Sequence

from starlette.datastructures import Headers
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from bookstack_mcp.config.settings import AppSettings
from bookstack_mcp.gating.auth_gate import AuthGate
from bookstack_mcp.gating.throttle import (
    REJECTION_BODY,
    UNKNOWN_CLIENT,
    FixedWindowRateLimiter,
)
from bookstack_mcp.logger import Logger

HEALTH_PREFIX = "/health"
DEFAULT_EXEMPT_PREFIXES = (HEALTH_PREFIX,)


def is_exempt(path: str, prefixes: Sequence[str]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


def client_key_from_scope(scope: Scope) -> str:
    """Remote address of the connection, or the shared ``unknown`` key."""
    client = scope.get("client")
    if client and client[0]:
        return str(client[0])
    return UNKNOWN_CLIENT


class ThrottleMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        limiter: FixedWindowRateLimiter,
        exempt_prefixes: Sequence[str] = DEFAULT_EXEMPT_PREFIXES,
    ):
        self.app = app
        self.limiter = limiter
        self.exempt_prefixes = tuple(exempt_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or is_exempt(scope["path"], self.exempt_prefixes):
            await self.app(scope, receive, send)
            return

        if not await self.limiter.acquire(client_key_from_scope(scope)):
            response = PlainTextResponse(REJECTION_BODY, status_code=429)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)


class AuthGateMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        gate: AuthGate,
        exempt_prefixes: Sequence[str] = DEFAULT_EXEMPT_PREFIXES,
    ):
        self.app = app
        self.gate = gate
        self.exempt_prefixes = tuple(exempt_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or is_exempt(scope["path"], self.exempt_prefixes):
            await self.app(scope, receive, send)
            return

        decision = self.gate.authorize(Headers(scope=scope))
        if not decision.allowed:
            response = PlainTextResponse(decision.body, status_code=401)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)


def build_gating_middleware(
    settings: AppSettings,
    logger: Logger,
    limiter: Optional[FixedWindowRateLimiter] = None,
    exempt_prefixes: Sequence[str] = DEFAULT_EXEMPT_PREFIXES,
) -> List[Middleware]:
    """Middleware stack for ``Starlette(middleware=...)``, outermost first.

    The throttle is only constructed when enabled in settings.
    """
    stack: List[Middleware] = []
    if settings.throttling.enabled:
        limiter = limiter or FixedWindowRateLimiter(settings.throttling, logger)
        stack.append(
            Middleware(ThrottleMiddleware, limiter=limiter, exempt_prefixes=exempt_prefixes)
        )
        logger.info(
            "Throttling enabled",
            permit_limit=settings.throttling.permit_limit,
            window_seconds=settings.throttling.window_seconds,
            queue_limit=settings.throttling.queue_limit,
        )
    else:
        logger.info("Throttling disabled")

    gate = AuthGate(settings.security, logger)
    stack.append(Middleware(AuthGateMiddleware, gate=gate, exempt_prefixes=exempt_prefixes))
    if gate.enabled:
        logger.info("Authentication header gate enabled", header=settings.security.auth_header_name)
    else:
        logger.warning("Authentication header gate disabled: all requests are allowed")
    return stack
