"""Tool registry, response envelopes and the MCP protocol server."""

from documents_mcp.mcp_server.registry import ToolDescriptor, ToolRegistry, ToolSummary
from documents_mcp.mcp_server.responses import (
    adapt,
    envelope_payload,
    failure_envelope,
    render_envelope,
)
from documents_mcp.mcp_server.server import create_server

__all__ = [
    "ToolDescriptor",
    "ToolRegistry",
    "ToolSummary",
    "adapt",
    "create_server",
    "envelope_payload",
    "failure_envelope",
    "render_envelope",
]
