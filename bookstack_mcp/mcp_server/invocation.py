"""Outcome of a tool dispatch."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class FailureKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class InvocationSuccess:
    payload: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class InvocationFailure:
    kind: FailureKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    recovery_strategy: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": "error",
            "error": self.kind.value,
            "message": self.message,
        }
        if self.recovery_strategy:
            payload["recovery_strategy"] = self.recovery_strategy
        for key, value in self.context.items():
            payload.setdefault(key, value)
        return payload


InvocationResult = Union[InvocationSuccess, InvocationFailure]
