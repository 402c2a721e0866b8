"""Shared-secret header gate.

A request passes when it carries the configured header exactly once with
exactly the configured value. When the gate is not fully configured every
request passes.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Union

from bookstack_mcp.config.settings import SecuritySettings
from bookstack_mcp.logger import Logger

MISSING_HEADER = "missing authentication header"
INVALID_HEADER = "invalid authentication header"

HeaderValues = Union[str, Sequence[str]]


@dataclass(frozen=True)
class AuthDecision:
    allowed: bool
    reason: Optional[str] = None

    @property
    def body(self) -> str:
        """Plain-text 401 body, e.g. ``Unauthorized: Missing authentication header``."""
        reason = self.reason or ""
        return f"Unauthorized: {reason[:1].upper()}{reason[1:]}"


ALLOW = AuthDecision(allowed=True)


class AuthGate:
    """Header presence/equality check evaluated once per request."""

    def __init__(self, settings: SecuritySettings, logger: Logger):
        self.settings = settings
        self.logger = logger
        self._header_name = (settings.auth_header_name or "").lower()

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    def authorize(self, headers: Mapping[str, HeaderValues]) -> AuthDecision:
        """Decide on a request given its headers.

        Args:
            headers: header name -> value, or name -> list of values when the
                header was sent more than once. Names are matched case-insensitively.
        """
        if not self.enabled:
            self.logger.debug("Security not configured, allowing request")
            return ALLOW

        values = self._lookup(headers)
        if not values:
            self.logger.warning(
                "Request missing required authentication header",
                header=self.settings.auth_header_name,
            )
            return AuthDecision(allowed=False, reason=MISSING_HEADER)

        if len(values) != 1 or values[0] != self.settings.auth_header_value:
            self.logger.warning(
                "Invalid authentication header value provided",
                header=self.settings.auth_header_name,
                occurrences=len(values),
            )
            return AuthDecision(allowed=False, reason=INVALID_HEADER)

        self.logger.debug("Authentication header validated successfully")
        return ALLOW

    def _lookup(self, headers: Mapping[str, HeaderValues]) -> List[str]:
        getlist = getattr(headers, "getlist", None)
        if getlist is not None:
            # starlette.datastructures.Headers keeps repeated headers
            return list(getlist(self._header_name))
        for name, value in headers.items():
            if name.lower() == self._header_name:
                if isinstance(value, str):
                    return [value]
                return list(value)
        return []
