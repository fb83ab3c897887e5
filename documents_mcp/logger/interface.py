"""Logger interface.

Implementations accept a human readable message plus arbitrary structured
fields, e.g. ``logger.info("Tool completed", tool="create-pdf")``.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract structured logger."""

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
