"""Session-related exceptions."""

from typing import Any, Dict, Optional

from documents_mcp.exceptions.base import ResourceNotFoundError, ValidationError


class SessionError(ValidationError):
    """Base exception for session-related errors."""

    pass


class SessionNotFoundError(ResourceNotFoundError):
    """Raised when a session id has no open connection."""

    def __init__(self, session_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code="SESSION_NOT_FOUND",
            message=f"Session '{session_id}' not found. Connect to /sse first.",
            details=details or {},
        )
        self.session_id = session_id


class MessageParseError(SessionError):
    """Raised when a published message is not a valid JSON-RPC message."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_MESSAGE", message=message, details=details or {})


class InvalidSessionStateError(SessionError):
    """Raised when session is in an invalid state for the requested operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_SESSION_STATE", message=message, details=details or {})
