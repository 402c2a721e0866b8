"""Parameter declarations and conversion of raw tool arguments.

Raw values arrive as decoded JSON (str, int, float, bool or None). Each
declared parameter names one ``ParameterKind``; the kind selects a parser
from a closed table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from bookstack_mcp.exceptions import InvalidArgumentError


class ParameterKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"


_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def parse_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"expected an integer, got {value!r}") from None
    raise ValueError(f"expected an integer, got {type(value).__name__}")


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"expected a boolean, got {value!r}")


def parse_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"expected a string, got {type(value).__name__}")


PARSERS: Dict[ParameterKind, Callable[[Any], Any]] = {
    ParameterKind.STRING: parse_string,
    ParameterKind.INTEGER: parse_integer,
    ParameterKind.BOOLEAN: parse_boolean,
}


@dataclass(frozen=True)
class ParameterDescriptor:
    """One declared tool parameter.

    ``nullable`` parameters are optional-of-T and default to None.
    ``include_in_errors`` marks parameters echoed into failure payloads.
    """

    name: str
    kind: ParameterKind
    required: bool = True
    default: Any = None
    description: str = ""
    nullable: bool = False
    include_in_errors: bool = False

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.kind.value}
        if self.nullable:
            schema["type"] = [self.kind.value, "null"]
        if self.description:
            schema["description"] = self.description
        if not self.required and self.default is not None:
            schema["default"] = self.default
        return schema

    def convert(self, value: Any) -> Any:
        try:
            return PARSERS[self.kind](value)
        except ValueError as exc:
            raise InvalidArgumentError(
                parameter=self.name,
                message=f"Invalid value for parameter '{self.name}': {exc}",
                details={"expected": self.kind.value},
            ) from exc


def required(name: str, kind: ParameterKind, description: str = "", **kwargs: Any) -> ParameterDescriptor:
    return ParameterDescriptor(name=name, kind=kind, required=True, description=description, **kwargs)


def optional(
    name: str,
    kind: ParameterKind,
    default: Any = None,
    description: str = "",
    **kwargs: Any,
) -> ParameterDescriptor:
    return ParameterDescriptor(
        name=name,
        kind=kind,
        required=False,
        default=default,
        description=description,
        nullable=default is None,
        **kwargs,
    )


def bind_arguments(
    parameters: Sequence[ParameterDescriptor], raw: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """Convert raw arguments into keyword arguments for a tool handler.

    None counts as absent only for optional parameters. Arguments that match
    no declared parameter are ignored.

    Raises:
        InvalidArgumentError: A required parameter is missing or null, or a
            value cannot be converted to the declared kind
    """
    raw = raw or {}
    bound: Dict[str, Any] = {}
    for parameter in parameters:
        value = raw.get(parameter.name)
        if value is None:
            if parameter.required:
                reason = "is required" if parameter.name not in raw else "must not be null"
                raise InvalidArgumentError(
                    parameter=parameter.name,
                    message=f"Parameter '{parameter.name}' {reason}",
                )
            bound[parameter.name] = parameter.default
            continue
        bound[parameter.name] = parameter.convert(value)
    return bound
