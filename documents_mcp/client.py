"""Client for a documents-mcp server.

Connects over stdio (spawning the server as a subprocess) or over the HTTP
event-stream transport, and unwraps each tool's JSON text envelope.

    client = create_client("stdio", command="documents-mcp")
    async with client:
        result = await client.create_pdf(
            {"title": "My Document", "content": [{"type": "text", "content": "Hello World"}]}
        )

    client = create_client("sse", url="http://localhost:3000/sse")

``connect()`` and ``disconnect()`` must run in the same task; the
underlying transports hold anyio task groups open between the two.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Any, AsyncContextManager, Dict, List, Mapping, Optional, Sequence

from mcp import ClientSession, StdioServerParameters
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.types import CallToolResult, Implementation

from documents_mcp.config_docs import SERVER_VERSION
from documents_mcp.exceptions import ClientConfigurationError, ClientNotConnectedError
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.responses import envelope_payload

CLIENT_NAME = "documents-mcp-client"
DEFAULT_COMMAND = "documents-mcp"
TRANSPORTS = ("stdio", "sse")


@dataclass(frozen=True)
class ToolInfo:
    name: str
    description: str


@dataclass(frozen=True)
class ToolCallResult:
    """A tool reply with its JSON envelope decoded into ``content``."""

    success: bool
    content: Any
    raw: CallToolResult


def unwrap_result(raw: CallToolResult) -> ToolCallResult:
    """Decode the envelope of a ``tools/call`` reply.

    A JSON object reports its own ``success`` flag. Plain text, or a reply
    with no text part, falls back to the protocol ``isError`` flag.
    """
    payload = envelope_payload(raw)
    if payload is None:
        return ToolCallResult(success=not raw.isError, content=raw.content, raw=raw)
    if isinstance(payload, dict):
        return ToolCallResult(
            success=bool(payload.get("success", not raw.isError)), content=payload, raw=raw
        )
    return ToolCallResult(success=not raw.isError, content=payload, raw=raw)


class DocumentsMcpClient:
    """MCP client for the documents-mcp tools."""

    def __init__(
        self,
        transport: str = "stdio",
        command: str = DEFAULT_COMMAND,
        args: Optional[Sequence[str]] = None,
        url: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[str] = None,
        logger: Logger = session_logger,
    ):
        """
        Initialize the client.

        Args:
            transport: "stdio" to spawn the server, "sse" to connect over HTTP
            command: Server command for stdio (default: documents-mcp)
            args: Arguments for the server command
            url: Event-stream URL for sse, e.g. http://localhost:3000/sse
            env: Environment for the spawned server (MCP SDK default if None)
            cwd: Working directory for the spawned server
            logger: Logger instance

        Raises:
            ClientConfigurationError: unknown transport, or sse without a url
        """
        if transport not in TRANSPORTS:
            raise ClientConfigurationError(
                f"Unknown transport: {transport}", details={"transports": list(TRANSPORTS)}
            )
        if transport == "sse" and not url:
            raise ClientConfigurationError("URL is required for SSE transport")

        self.transport = transport
        self.command = command
        self.args = list(args or [])
        self.url = url
        self.env = env
        self.cwd = cwd
        self.logger = logger
        self._stack: Optional[contextlib.AsyncExitStack] = None
        self._session: Optional[ClientSession] = None

    @property
    def connected(self) -> bool:
        return self._session is not None

    def _open_streams(self) -> AsyncContextManager[Any]:
        if self.transport == "stdio":
            return stdio_client(
                StdioServerParameters(
                    command=self.command, args=self.args, env=self.env, cwd=self.cwd
                )
            )
        return sse_client(self.url)

    async def connect(self) -> None:
        """Open the transport and run the initialize handshake. Idempotent."""
        if self._session is not None:
            return

        stack = contextlib.AsyncExitStack()
        try:
            streams = await stack.enter_async_context(self._open_streams())
            read_stream, write_stream = streams[0], streams[1]
            session = await stack.enter_async_context(
                ClientSession(
                    read_stream,
                    write_stream,
                    client_info=Implementation(name=CLIENT_NAME, version=SERVER_VERSION),
                )
            )
            await session.initialize()
        except BaseException:
            await stack.aclose()
            raise

        self._stack = stack
        self._session = session
        self.logger.info("Connected to documents-mcp", transport=self.transport)

    async def disconnect(self) -> None:
        """Close the session and its transport. Idempotent."""
        if self._stack is None:
            return
        stack = self._stack
        self._stack = None
        self._session = None
        await stack.aclose()
        self.logger.info("Disconnected from documents-mcp", transport=self.transport)

    async def __aenter__(self) -> "DocumentsMcpClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ClientNotConnectedError(details={"transport": self.transport})
        return self._session

    async def list_tools(self) -> List[ToolInfo]:
        session = self._require_session()
        result = await session.list_tools()
        return [ToolInfo(name=tool.name, description=tool.description or "") for tool in result.tools]

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolCallResult:
        session = self._require_session()
        self.logger.debug("Calling tool", tool=name)
        raw = await session.call_tool(name, arguments=dict(arguments or {}))
        result = unwrap_result(raw)
        if not result.success:
            self.logger.debug("Tool reported failure", tool=name)
        return result

    # Typed wrappers; options use the tools' wire names (camelCase)

    async def create_pdf(self, options: Mapping[str, Any]) -> ToolCallResult:
        return await self.call_tool("create-pdf", options)

    async def create_docx(self, options: Mapping[str, Any]) -> ToolCallResult:
        return await self.call_tool("create-docx", options)

    async def create_pptx(self, options: Mapping[str, Any]) -> ToolCallResult:
        return await self.call_tool("create-pptx", options)

    async def read_pdf(self, options: Mapping[str, Any]) -> ToolCallResult:
        return await self.call_tool("read-pdf", options)

    async def read_docx(self, options: Mapping[str, Any]) -> ToolCallResult:
        return await self.call_tool("read-docx", options)

    async def read_pptx(self, options: Mapping[str, Any]) -> ToolCallResult:
        return await self.call_tool("read-pptx", options)


def create_client(transport: str = "stdio", **options: Any) -> DocumentsMcpClient:
    """Build a client; see ``DocumentsMcpClient`` for the options."""
    return DocumentsMcpClient(transport, **options)


__all__ = [
    "DocumentsMcpClient",
    "ToolCallResult",
    "ToolInfo",
    "create_client",
    "unwrap_result",
]
