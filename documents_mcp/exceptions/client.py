"""Client-side exceptions."""

from typing import Any, Dict, Optional

from documents_mcp.exceptions.base import ConfigurationError, DocumentsMcpError


class ClientError(DocumentsMcpError):
    """Base exception for documents-mcp client errors."""

    pass


class ClientNotConnectedError(ClientError):
    """Raised when a call is made before ``connect()``."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code="CLIENT_NOT_CONNECTED",
            message="Client is not connected. Call connect() first.",
            details=details or {},
        )


class ClientConfigurationError(ConfigurationError):
    """Raised for an unknown transport or missing connection settings."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_CLIENT_OPTIONS", message=message, details=details or {})
