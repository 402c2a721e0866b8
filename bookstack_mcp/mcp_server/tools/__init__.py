"""BookStack tool catalogue."""

from typing import List

from bookstack_mcp.client import BookStackClient
from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.tool_registry import ToolDescriptor, ToolRegistry, ToolRegistryBuilder
from bookstack_mcp.mcp_server.tools.read_tools import ReadTools
from bookstack_mcp.mcp_server.tools.write_tools import WriteTools


def read_tool_descriptors(client: BookStackClient, logger: Logger) -> List[ToolDescriptor]:
    return ReadTools(client, logger).descriptors()


def write_tool_descriptors(client: BookStackClient, logger: Logger) -> List[ToolDescriptor]:
    return WriteTools(client, logger).descriptors()


def build_tool_registry(
    client: BookStackClient, logger: Logger, enable_write_tools: bool = True
) -> ToolRegistry:
    builder = ToolRegistryBuilder(logger).include(read_tool_descriptors(client, logger))
    if enable_write_tools:
        builder.include(write_tool_descriptors(client, logger))
    else:
        logger.info("Write tools disabled; exposing read-only surface")
    return builder.build()


__all__ = [
    "ReadTools",
    "WriteTools",
    "read_tool_descriptors",
    "write_tool_descriptors",
    "build_tool_registry",
]
