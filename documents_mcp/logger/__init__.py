"""
Logger module for documents-mcp

This module provides a structured logging interface so components can be
handed any implementation (tests often pass a mock).

Usage:
    from documents_mcp.logger import Logger, session_logger

    logger: Logger = session_logger
    logger.info("Application started", transport="stdio")

    # Or implement your own
    class MyCustomLogger(Logger):
        def info(self, message: str, **kwargs):
            # Your custom implementation
            pass
"""

import logging

from documents_mcp.config import Config
from documents_mcp.logger.console_logger import ConsoleLogger
from documents_mcp.logger.interface import Logger

# Shared logger instance for modules that just need basic console logging
session_logger: ConsoleLogger = ConsoleLogger(
    level=logging.getLevelName(Config.get_log_level())
)

__all__ = [
    "Logger",
    "ConsoleLogger",
    "session_logger",
]
