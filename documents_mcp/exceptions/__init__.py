"""Custom exceptions for the tool registry, sessions, transports and client."""

from documents_mcp.exceptions.base import (
    ConfigurationError,
    DocumentsMcpError,
    RegistryError,
    ResourceNotFoundError,
    ValidationError,
)
from documents_mcp.exceptions.client import (
    ClientConfigurationError,
    ClientError,
    ClientNotConnectedError,
)
from documents_mcp.exceptions.session import (
    InvalidSessionStateError,
    MessageParseError,
    SessionError,
    SessionNotFoundError,
)

__all__ = [
    # Base exceptions
    "DocumentsMcpError",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "RegistryError",
    # Session exceptions
    "SessionError",
    "SessionNotFoundError",
    "MessageParseError",
    "InvalidSessionStateError",
    # Client exceptions
    "ClientError",
    "ClientNotConnectedError",
    "ClientConfigurationError",
]
