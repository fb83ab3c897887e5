"""Runtime configuration for documents-mcp.

Values are read from the environment on every call so tests can patch
``os.environ`` with ``monkeypatch``. See ``config_docs`` for the full list.
"""

import os
from pathlib import Path
from typing import Optional

from documents_mcp.config_docs import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_HTTP_PORT,
    DEFAULT_LOG_LEVEL,
)
from documents_mcp.exceptions import ConfigurationError

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Environment-backed configuration accessors."""

    _test_output_dir: Optional[Path] = None

    @classmethod
    def get_output_dir(cls) -> Path:
        """Directory that relative ``outputPath`` values resolve against."""
        if cls._test_output_dir is not None:
            return cls._test_output_dir
        output_dir = os.environ.get("OUTPUT_DIR")
        if output_dir:
            return Path(output_dir)
        return Path.cwd()

    @classmethod
    def get_google_api_key(cls) -> Optional[str]:
        return os.environ.get("GOOGLE_API_KEY") or None

    @classmethod
    def get_gemini_model(cls) -> str:
        return os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)

    @classmethod
    def get_http_port(cls) -> int:
        value = os.environ.get("PORT", str(DEFAULT_HTTP_PORT))
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigurationError(
                code="INVALID_PORT",
                message=f"PORT must be an integer, got '{value}'",
                details={"PORT": value},
            ) from exc

    @classmethod
    def get_log_level(cls) -> str:
        level = os.environ.get("DOCUMENTS_MCP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        return level if level in _VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL

    @classmethod
    def set_test_mode(cls, output_dir: Path) -> None:
        cls._test_output_dir = Path(output_dir)

    @classmethod
    def clear_test_mode(cls) -> None:
        cls._test_output_dir = None

    @classmethod
    def is_test_mode(cls) -> bool:
        return cls._test_output_dir is not None
