"""Optional AI analysis of document contents."""

from documents_mcp.ai.analysis import (
    DEFAULT_ANALYSIS_PROMPT,
    MISSING_API_KEY_MESSAGE,
    analyze_document,
)

__all__ = [
    "DEFAULT_ANALYSIS_PROMPT",
    "MISSING_API_KEY_MESSAGE",
    "analyze_document",
]
