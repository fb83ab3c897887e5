"""Command line entry point.

    python -m documents_mcp                      # stdio (default)
    python -m documents_mcp --transport http     # SSE on PORT or 3000
"""

import argparse
import logging
import sys
from typing import List, Optional

import anyio

from documents_mcp.config import Config
from documents_mcp.config_docs import DEFAULT_HTTP_HOST, SERVER_DESCRIPTION
from documents_mcp.logger import Logger, session_logger
from documents_mcp.tools import build_registry
from documents_mcp.transports import run_stdio, serve_http

logger: Logger = session_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="documents-mcp", description=SERVER_DESCRIPTION)
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=DEFAULT_HTTP_HOST,
        help=f"Host address for the http transport (default: {DEFAULT_HTTP_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the http transport (default: 3000, or PORT env var)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging verbosity (default: DOCUMENTS_MCP_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.log_level:
        session_logger.set_level(logging.getLevelName(args.log_level))

    try:
        registry = build_registry(logger)
        if args.transport == "http":
            port = args.port if args.port is not None else Config.get_http_port()
            anyio.run(serve_http, registry, args.host, port, logger)
        else:
            anyio.run(run_stdio, registry, logger)
    except KeyboardInterrupt:
        logger.info("Shutdown complete")
    except Exception as e:
        logger.error("Server failed", error=str(e), error_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
