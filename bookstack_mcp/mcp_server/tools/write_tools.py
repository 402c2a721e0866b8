"""BookStack tools that create or delete content.

Registered separately from the read tools so a deployment can run read-only.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from bookstack_mcp.client import BookStackClient, EntityKind
from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.binding import ParameterDescriptor, ParameterKind, optional, required
from bookstack_mcp.mcp_server.tool_registry import ToolDescriptor


def _name(entity: str) -> ParameterDescriptor:
    return required("name", ParameterKind.STRING, f"Name of the {entity}", include_in_errors=True)


def _description(entity: str) -> ParameterDescriptor:
    return optional("description", ParameterKind.STRING, description=f"Plain-text {entity} description")


def _id(entity: str) -> ParameterDescriptor:
    return required("id", ParameterKind.INTEGER, f"Numeric id of the {entity} to delete", include_in_errors=True)


class WriteTools:
    def __init__(self, client: BookStackClient, logger: Logger):
        self.client = client
        self.logger = logger

    async def create_book(self, name: str, description: Optional[str]) -> Dict[str, Any]:
        self.logger.info("Creating book", name=name)
        result = await self.client.create(EntityKind.BOOK, {"name": name, "description": description})
        self.logger.info("Book created", id=result.get("id"))
        return result

    async def create_chapter(
        self, name: str, book_id: int, description: Optional[str], priority: int
    ) -> Dict[str, Any]:
        self.logger.info("Creating chapter", name=name, book_id=book_id)
        result = await self.client.create(
            EntityKind.CHAPTER,
            {"name": name, "book_id": book_id, "description": description, "priority": priority},
        )
        self.logger.info("Chapter created", id=result.get("id"))
        return result

    async def create_page(
        self,
        name: str,
        content: str,
        book_id: Optional[int],
        chapter_id: Optional[int],
    ) -> Dict[str, Any]:
        self.logger.info("Creating page", name=name, book_id=book_id, chapter_id=chapter_id)
        result = await self.client.create(
            EntityKind.PAGE,
            {"name": name, "html": content, "book_id": book_id, "chapter_id": chapter_id},
        )
        self.logger.info("Page created", id=result.get("id"))
        return result

    async def create_shelf(self, name: str, description: Optional[str]) -> Dict[str, Any]:
        self.logger.info("Creating shelf", name=name)
        result = await self.client.create(EntityKind.SHELF, {"name": name, "description": description})
        self.logger.info("Shelf created", id=result.get("id"))
        return result

    async def delete_entity(self, kind: EntityKind, id: int) -> Dict[str, Any]:
        self.logger.info("Deleting item", kind=kind.value, id=id)
        await self.client.delete(kind, id)
        self.logger.info("Item deleted", kind=kind.value, id=id)
        return {"success": True}

    def descriptors(self) -> List[ToolDescriptor]:
        return [
            ToolDescriptor(
                name="create_book",
                description="Create a new book",
                handler=self.create_book,
                parameters=(_name("book"), _description("book")),
                failure_summary="Failed to create book",
            ),
            self._delete_tool(EntityKind.BOOK, "book"),
            ToolDescriptor(
                name="create_chapter",
                description="Create a new chapter inside a book",
                handler=self.create_chapter,
                parameters=(
                    _name("chapter"),
                    required(
                        "book_id",
                        ParameterKind.INTEGER,
                        "Id of the book that will contain the chapter",
                        include_in_errors=True,
                    ),
                    _description("chapter"),
                    optional("priority", ParameterKind.INTEGER, default=0, description="Sort order in the book"),
                ),
                failure_summary="Failed to create chapter",
            ),
            self._delete_tool(EntityKind.CHAPTER, "chapter"),
            ToolDescriptor(
                name="create_page",
                description="Create a new page in a book or chapter. content is HTML.",
                handler=self.create_page,
                parameters=(
                    _name("page"),
                    required("content", ParameterKind.STRING, "Page body as HTML"),
                    optional(
                        "book_id",
                        ParameterKind.INTEGER,
                        description="Parent book id",
                        include_in_errors=True,
                    ),
                    optional(
                        "chapter_id",
                        ParameterKind.INTEGER,
                        description="Parent chapter id",
                        include_in_errors=True,
                    ),
                ),
                failure_summary="Failed to create page",
            ),
            self._delete_tool(EntityKind.PAGE, "page"),
            ToolDescriptor(
                name="create_shelf",
                description="Create a new shelf",
                handler=self.create_shelf,
                parameters=(_name("shelf"), _description("shelf")),
                failure_summary="Failed to create shelf",
            ),
            self._delete_tool(EntityKind.SHELF, "shelf"),
        ]

    def _delete_tool(self, kind: EntityKind, singular: str) -> ToolDescriptor:
        async def handler(id: int) -> Dict[str, Any]:
            return await self.delete_entity(kind, id)

        return ToolDescriptor(
            name=f"delete_{singular}",
            description=f"Delete a {singular}",
            handler=handler,
            parameters=(_id(singular),),
            failure_summary=f"Failed to delete {singular}",
        )
