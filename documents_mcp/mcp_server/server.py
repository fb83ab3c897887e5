"""Protocol server factory.

Each call builds an independent low-level MCP ``Server`` bound to the given
registry. The stdio binding creates one; the HTTP binding creates one per
event-stream session.

The low-level server starts a task per inbound message, in arrival order.
Tool calls on one server instance then queue on a FIFO lock, so they run one
at a time and each finishes before the next one starts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import anyio
from mcp.server import Server
from mcp.types import CallToolResult, Tool

from documents_mcp.config_docs import SERVER_NAME, SERVER_VERSION
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.registry import ToolRegistry


def create_server(registry: ToolRegistry, logger: Logger = session_logger) -> Server:
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)
    dispatch_lock = anyio.Lock()

    @server.list_tools()
    async def handle_list_tools() -> List[Tool]:
        logger.debug("Tool listing requested", tools=len(registry))
        return registry.tools()

    # Contracts validate arguments themselves so failures keep the
    # {success: false, error} envelope shape.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        async with dispatch_lock:
            return await registry.dispatch(name, arguments or {})

    return server
