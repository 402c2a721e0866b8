"""Configuration models and loading."""

from bookstack_mcp.config.loader import load_settings, require_upstream
from bookstack_mcp.config.settings import (
    AppSettings,
    SecuritySettings,
    ServerSettings,
    ThrottlingSettings,
    UpstreamSettings,
)

__all__ = [
    "AppSettings",
    "UpstreamSettings",
    "SecuritySettings",
    "ThrottlingSettings",
    "ServerSettings",
    "load_settings",
    "require_upstream",
]
