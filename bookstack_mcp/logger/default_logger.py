"""Logger backed by the standard library ``logging`` module."""

import logging
from typing import Any, Dict, Optional

from .interface import Logger


def format_context(message: str, context: Dict[str, Any]) -> str:
    """Render ``message key=value ...`` with keys in call order."""
    if not context:
        return message
    pairs = " ".join(f"{key}={value!r}" if isinstance(value, str) else f"{key}={value}"
                     for key, value in context.items())
    return f"{message} {pairs}"


class DefaultLogger(Logger):
    """Forwards to a named stdlib logger without touching handler configuration.

    Use this when the host application already configures ``logging``.
    """

    def __init__(self, name: str = "bookstack_mcp", logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, message: str, kwargs: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        exc_info = kwargs.pop("exc_info", None)
        self._logger.log(level, format_context(message, kwargs), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)
