"""Console logger backed by the standard logging module.

Output always goes to stderr. The stdio transport owns stdout for protocol
traffic, so nothing in this package may log there.
"""

import logging
import sys
from typing import Any, Optional, TextIO

from documents_mcp.logger.interface import Logger

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _format_fields(kwargs: dict) -> str:
    if not kwargs:
        return ""
    return " " + " ".join(f"{key}={value!r}" for key, value in kwargs.items())


class ConsoleLogger(Logger):
    """Structured logger that renders ``message key=value ...`` lines."""

    def __init__(
        self,
        name: str = "documents-mcp",
        level: int = logging.INFO,
        stream: Optional[TextIO] = None,
    ):
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self._logger.addHandler(handler)

    @property
    def name(self) -> str:
        return self._logger.name

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def _log(self, level: int, message: str, kwargs: dict) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, "%s%s", message, _format_fields(kwargs))

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
