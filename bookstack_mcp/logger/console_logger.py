"""Console logger with its own stream handler."""

import logging
import sys
from typing import Optional, TextIO, Union

from .default_logger import DefaultLogger

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def parse_level(level: Union[int, str]) -> int:
    """Accept ``logging.INFO`` or ``"info"``/``"INFO"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


class ConsoleLogger(DefaultLogger):
    """Writes to stderr (or a given stream) regardless of root logger setup."""

    def __init__(
        self,
        name: str = "bookstack_mcp",
        level: Union[int, str] = logging.INFO,
        stream: Optional[TextIO] = None,
    ):
        std_logger = logging.getLogger(name)
        std_logger.propagate = False
        if not any(getattr(h, "_bookstack_console", False) for h in std_logger.handlers):
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            handler._bookstack_console = True  # type: ignore[attr-defined]
            std_logger.addHandler(handler)
        std_logger.setLevel(parse_level(level))
        super().__init__(name=name, logger=std_logger)

    def set_level(self, level: Union[int, str]) -> None:
        self._logger.setLevel(parse_level(level))
