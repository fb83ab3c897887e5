"""Session management package."""
from documents_mcp.sessions.manager import Session, SessionManager, SessionState, parse_message

__all__ = ["Session", "SessionManager", "SessionState", "parse_message"]
