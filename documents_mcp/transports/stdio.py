"""Stdio transport: one implicit session over stdin/stdout.

stdout carries only line-delimited JSON-RPC messages; every diagnostic goes
through the logger, which writes to stderr.
"""

from __future__ import annotations

from mcp.server.stdio import stdio_server

from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.registry import ToolRegistry
from documents_mcp.mcp_server.server import create_server


async def run_stdio(registry: ToolRegistry, logger: Logger = session_logger) -> None:
    server = create_server(registry, logger)

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Documents MCP Server running on STDIO", tools=registry.names())
        await server.run(read_stream, write_stream, server.create_initialization_options())

    logger.info("STDIO input closed, server stopped")
