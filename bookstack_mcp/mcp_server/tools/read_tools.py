"""Read-only BookStack tools: listing, lookup and search."""

from __future__ import annotations

from typing import Any, Dict, List

from bookstack_mcp.client import BookStackClient, EntityKind, Filter, FilterOperator
from bookstack_mcp.config_docs import DEFAULT_PAGE_COUNT, DEFAULT_PAGE_OFFSET
from bookstack_mcp.exceptions import InvalidArgumentError
from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.binding import ParameterDescriptor, ParameterKind, optional, required
from bookstack_mcp.mcp_server.tool_registry import ToolDescriptor

OFFSET = optional(
    "offset", ParameterKind.INTEGER, default=DEFAULT_PAGE_OFFSET, description="Number of items to skip"
)
COUNT = optional(
    "count",
    ParameterKind.INTEGER,
    default=DEFAULT_PAGE_COUNT,
    description="Maximum number of items to return",
)
QUERY = required("query", ParameterKind.STRING, "Text to match against item names")


def _id_param(entity: str) -> ParameterDescriptor:
    return required("id", ParameterKind.INTEGER, f"Numeric {entity} id")


class ReadTools:
    """Handlers forwarding to the BookStack listing and read endpoints."""

    def __init__(self, client: BookStackClient, logger: Logger):
        self.client = client
        self.logger = logger

    async def list_entities(self, kind: EntityKind, offset: int, count: int) -> Dict[str, Any]:
        return await self.client.list(kind, offset=offset, count=count)

    async def get_entity(self, kind: EntityKind, id: int) -> Dict[str, Any]:
        return await self.client.read(kind, id)

    async def search_entities(
        self, kind: EntityKind, query: str, offset: int, count: int
    ) -> Dict[str, Any]:
        filters = [Filter(field="name", value=query, operator=FilterOperator.LIKE)]
        return await self.client.list(kind, offset=offset, count=count, filters=filters)

    async def search_all(self, query: str, offset: int, count: int) -> Dict[str, Any]:
        return {
            "query": query,
            "books": await self.search_entities(EntityKind.BOOK, query, offset, count),
            "chapters": await self.search_entities(EntityKind.CHAPTER, query, offset, count),
            "pages": await self.search_entities(EntityKind.PAGE, query, offset, count),
        }

    async def advanced_search(
        self,
        entity_type: str,
        field: str,
        value: str,
        operator_type: str,
        offset: int,
        count: int,
    ) -> Dict[str, Any]:
        try:
            kind = EntityKind.parse(entity_type)
        except ValueError as exc:
            raise InvalidArgumentError(
                parameter="entity_type",
                message=f"{exc}. Supported types: {', '.join(EntityKind.supported_names())}",
                details={"supported_types": EntityKind.supported_names()},
            ) from exc
        operator = FilterOperator.parse(operator_type)
        if operator.value != operator_type.strip().lower():
            self.logger.debug(
                "Unknown filter operator, using like", operator_type=operator_type
            )
        filters = [Filter(field=field, value=value, operator=operator)]
        return await self.client.list(kind, offset=offset, count=count, filters=filters)

    def descriptors(self) -> List[ToolDescriptor]:
        tools: List[ToolDescriptor] = []
        for kind, singular in _ENTITY_NAMES:
            tools.append(
                ToolDescriptor(
                    name=f"list_{kind.value}",
                    description=f"List all {kind.value}",
                    handler=_bind_kind(self.list_entities, kind),
                    parameters=(OFFSET, COUNT),
                )
            )
            tools.append(
                ToolDescriptor(
                    name=f"get_{singular}",
                    description=f"Get {singular} details by ID",
                    handler=_bind_kind(self.get_entity, kind),
                    parameters=(_id_param(singular),),
                )
            )
        tools.append(
            ToolDescriptor(
                name="search_all",
                description="Search across all BookStack content (books, chapters, pages)",
                handler=self.search_all,
                parameters=(QUERY, OFFSET, COUNT),
            )
        )
        for kind, description in _SEARCH_DESCRIPTIONS:
            tools.append(
                ToolDescriptor(
                    name=f"search_{kind.value}",
                    description=description,
                    handler=_bind_kind(self.search_entities, kind),
                    parameters=(QUERY, OFFSET, COUNT),
                )
            )
        tools.append(
            ToolDescriptor(
                name="advanced_search",
                description=(
                    "Advanced search with custom filters. entity_type is one of "
                    "book, chapter, page, shelf, user (singular or plural)."
                ),
                handler=self.advanced_search,
                parameters=(
                    required("entity_type", ParameterKind.STRING, "Entity type to search"),
                    required("field", ParameterKind.STRING, "Field to filter on, e.g. name"),
                    required("value", ParameterKind.STRING, "Value to compare against"),
                    optional(
                        "operator_type",
                        ParameterKind.STRING,
                        default=FilterOperator.LIKE.value,
                        description="One of eq, ne, gt, lt, gte, lte, like",
                    ),
                    OFFSET,
                    COUNT,
                ),
            )
        )
        return tools


_ENTITY_NAMES = (
    (EntityKind.BOOK, "book"),
    (EntityKind.CHAPTER, "chapter"),
    (EntityKind.PAGE, "page"),
    (EntityKind.SHELF, "shelf"),
    (EntityKind.USER, "user"),
)

_SEARCH_DESCRIPTIONS = (
    (EntityKind.BOOK, "Search for books by name or description"),
    (EntityKind.CHAPTER, "Search for chapters by name or description"),
    (EntityKind.PAGE, "Search for pages by name or content"),
    (EntityKind.SHELF, "Search for shelves by name or description"),
    (EntityKind.USER, "Search for users by name or email"),
)


def _bind_kind(method: Any, kind: EntityKind) -> Any:
    async def handler(**kwargs: Any) -> Any:
        return await method(kind, **kwargs)

    handler.__name__ = f"{method.__name__}_{kind.value}"
    return handler
