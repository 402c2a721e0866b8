"""Abstract logger interface.

Every component logs through this interface so callers can drop in their own
implementation. Messages are plain strings; context travels as keyword
arguments and is rendered by the concrete logger.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Structured logger: ``logger.info("message", key=value, ...)``."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        ...

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        ...

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        ...

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        ...
