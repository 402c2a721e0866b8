"""Request gating: shared-secret header gate and per-client throttling."""

from bookstack_mcp.gating.auth_gate import (
    INVALID_HEADER,
    MISSING_HEADER,
    AuthDecision,
    AuthGate,
)
from bookstack_mcp.gating.middleware import (
    AuthGateMiddleware,
    ThrottleMiddleware,
    build_gating_middleware,
    client_key_from_scope,
)
from bookstack_mcp.gating.throttle import (
    REJECTION_BODY,
    UNKNOWN_CLIENT,
    FixedWindowRateLimiter,
    ThrottleDecision,
    ThrottleOutcome,
)

__all__ = [
    "AuthGate",
    "AuthDecision",
    "MISSING_HEADER",
    "INVALID_HEADER",
    "FixedWindowRateLimiter",
    "ThrottleDecision",
    "ThrottleOutcome",
    "REJECTION_BODY",
    "UNKNOWN_CLIENT",
    "ThrottleMiddleware",
    "AuthGateMiddleware",
    "build_gating_middleware",
    "client_key_from_scope",
]
