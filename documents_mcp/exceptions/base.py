"""Base exception classes for documents-mcp.

Every error carries a machine readable ``code``, a human readable
``message`` and an optional ``details`` mapping.
"""

from typing import Any, Dict, Optional


class DocumentsMcpError(Exception):
    """Root of the documents-mcp exception hierarchy."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(DocumentsMcpError):
    """Raised when input fails validation."""

    pass


class ResourceNotFoundError(DocumentsMcpError):
    """Raised when a named resource does not exist."""

    pass


class ConfigurationError(DocumentsMcpError):
    """Raised for invalid or missing configuration."""

    pass


class RegistryError(DocumentsMcpError):
    """Raised for tool registration problems."""

    pass
