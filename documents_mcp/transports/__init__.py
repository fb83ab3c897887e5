"""Transports exposing the tool registry: stdio and HTTP event streams."""

from documents_mcp.transports.http import DocumentsHttpServer, SubscribeEndpoint, serve_http
from documents_mcp.transports.stdio import run_stdio

__all__ = [
    "DocumentsHttpServer",
    "SubscribeEndpoint",
    "run_stdio",
    "serve_http",
]
