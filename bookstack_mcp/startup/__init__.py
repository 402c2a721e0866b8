"""Startup helpers shared by the entry points."""

from bookstack_mcp.startup.settings_loader import (
    add_common_arguments,
    cli_overrides,
    resolve_settings,
)

__all__ = ["add_common_arguments", "cli_overrides", "resolve_settings"]
