"""Settings models for the server.

Each component receives the section it needs through its constructor. The
models are frozen: settings are loaded once at startup and are safe to read
concurrently afterwards.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookstack_mcp.config_docs import (
    DEFAULT_HEALTH_TIMEOUT_SECONDS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MCP_PORT,
    DEFAULT_PERMIT_LIMIT,
    DEFAULT_QUEUE_LIMIT,
    DEFAULT_WEB_PORT,
    DEFAULT_WINDOW_SECONDS,
)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class UpstreamSettings(_Section):
    """Where the BookStack API lives and how to authenticate against it."""

    base_url: str = ""
    token_id: str = ""
    token_secret: str = ""

    @field_validator("base_url")
    @classmethod
    def _trim_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def status_url(self) -> str:
        return f"{self.base_url}/api/status"


class SecuritySettings(_Section):
    """Shared-secret header required on every gated request.

    The gate is all-or-nothing: when either field is empty it is disabled.
    """

    auth_header_name: Optional[str] = None
    auth_header_value: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return bool(self.auth_header_name) and bool(self.auth_header_value)


class ThrottlingSettings(_Section):
    enabled: bool = True
    permit_limit: int = Field(default=DEFAULT_PERMIT_LIMIT, ge=1)
    window_seconds: int = Field(default=DEFAULT_WINDOW_SECONDS, ge=1)
    queue_limit: int = Field(default=DEFAULT_QUEUE_LIMIT, ge=0)


class ServerSettings(_Section):
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_MCP_PORT, ge=1, le=65535)
    web_port: int = Field(default=DEFAULT_WEB_PORT, ge=1, le=65535)
    enable_write_tools: bool = True
    health_timeout_seconds: float = Field(default=DEFAULT_HEALTH_TIMEOUT_SECONDS, gt=0)
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class AppSettings(_Section):
    bookstack: UpstreamSettings = Field(default_factory=UpstreamSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    throttling: ThrottlingSettings = Field(default_factory=ThrottlingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
