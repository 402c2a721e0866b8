"""Tool descriptors, the startup-time registry builder and dispatch.

Tools are registered once, through an explicit table of descriptors, and the
built registry is read-only. Dispatch never raises for tool-level problems:
lookup, binding and handler failures all come back as InvocationFailure.
"""

import asyncio
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from bookstack_mcp.errors import map_error_for_mcp, recovery_for
from bookstack_mcp.exceptions import (
    BookStackMcpError,
    DuplicateToolError,
    InvalidArgumentError,
    ToolNotFoundError,
)
from bookstack_mcp.logger import Logger
from bookstack_mcp.mcp_server.binding import ParameterDescriptor, bind_arguments
from bookstack_mcp.mcp_server.invocation import (
    FailureKind,
    InvocationFailure,
    InvocationResult,
    InvocationSuccess,
)

ToolCallable = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    handler: ToolCallable
    parameters: Tuple[ParameterDescriptor, ...] = ()
    failure_summary: Optional[str] = None

    @property
    def input_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
        }
        required = [p.name for p in self.parameters if p.required]
        if required:
            schema["required"] = required
        return schema

    def error_context(self, bound: Mapping[str, Any]) -> Dict[str, Any]:
        context: Dict[str, Any] = {}
        if self.failure_summary:
            context["summary"] = self.failure_summary
        for parameter in self.parameters:
            if parameter.include_in_errors and parameter.name in bound:
                context[parameter.name] = bound[parameter.name]
        return context


class ToolRegistryBuilder:
    """Collects descriptors at startup; ``build()`` freezes them."""

    def __init__(self, logger: Logger):
        self.logger = logger
        self._tools: Dict[str, ToolDescriptor] = {}

    def add(self, tool: ToolDescriptor) -> "ToolRegistryBuilder":
        if tool.name in self._tools:
            raise DuplicateToolError(tool.name)
        self._tools[tool.name] = tool
        return self

    def include(self, tools: Iterable[ToolDescriptor]) -> "ToolRegistryBuilder":
        for tool in tools:
            self.add(tool)
        return self

    def build(self) -> "ToolRegistry":
        self.logger.info("Tool registry built", tool_count=len(self._tools))
        return ToolRegistry(dict(self._tools), self.logger)


class ToolRegistry:
    def __init__(self, tools: Mapping[str, ToolDescriptor], logger: Logger):
        self._tools = MappingProxyType(dict(tools))
        self.logger = logger

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[ToolDescriptor]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolDescriptor:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name, available=self.names)
        return tool

    def bind(self, name: str, raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Bound keyword arguments for ``name``, without invoking it.

        Raises:
            ToolNotFoundError: No tool is registered under ``name``
            InvalidArgumentError: Binding failed
        """
        return bind_arguments(self.get(name).parameters, raw)

    async def dispatch(self, name: str, raw: Optional[Mapping[str, Any]]) -> InvocationResult:
        try:
            tool = self.get(name)
        except ToolNotFoundError as exc:
            self.logger.warning("Unknown tool requested", tool=name)
            return _failure(FailureKind.NOT_FOUND, exc)

        try:
            bound = bind_arguments(tool.parameters, raw)
        except InvalidArgumentError as exc:
            self.logger.warning(
                "Tool arguments rejected", tool=name, parameter=exc.parameter, error=exc.message
            )
            return _failure(FailureKind.BAD_REQUEST, exc)

        try:
            payload = await tool.handler(**bound)
        except asyncio.CancelledError:
            self.logger.info("Tool invocation cancelled", tool=name)
            raise
        except InvalidArgumentError as exc:
            self.logger.warning(
                "Tool rejected argument value", tool=name, parameter=exc.parameter, error=exc.message
            )
            return _failure(FailureKind.BAD_REQUEST, exc, tool.error_context(bound))
        except Exception as exc:
            self.logger.error(
                tool.failure_summary or "Tool invocation failed",
                tool=name,
                error_type=type(exc).__name__,
                error=str(exc),
                **tool.error_context(bound),
            )
            return _failure(FailureKind.INTERNAL_ERROR, exc, tool.error_context(bound))

        self.logger.debug("Tool completed successfully", tool=name)
        return InvocationSuccess(payload)


def _failure(
    kind: FailureKind, exc: Exception, context: Optional[Dict[str, Any]] = None
) -> InvocationFailure:
    if isinstance(exc, BookStackMcpError):
        mapped = map_error_for_mcp(exc)
        mapped.pop("error")
        message = mapped.pop("message")
        recovery = mapped.pop("recovery_strategy")
    else:
        mapped = {}
        message = str(exc) or type(exc).__name__
        recovery = recovery_for(kind.value)
    mapped.update(context or {})
    return InvocationFailure(kind=kind, message=message, context=mapped, recovery_strategy=recovery)
