from __future__ import annotations

from typing import List, Union

from mcp.types import EmbeddedResource, ImageContent, TextContent

ToolResponse = List[Union[TextContent, ImageContent, EmbeddedResource]]
