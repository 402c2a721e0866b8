"""BookStack REST API client."""

from bookstack_mcp.client.api_client import (
    BookStackClient,
    EntityKind,
    Filter,
    FilterOperator,
)

__all__ = ["BookStackClient", "EntityKind", "Filter", "FilterOperator"]
