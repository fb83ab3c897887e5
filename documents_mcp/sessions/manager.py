"""Session management for the event-stream transport.

A session binds one long-lived event-stream connection to one MCP protocol
server instance. Inbound messages published for the session are queued on
its inbound stream in arrival order; everything the server writes back is
read from its outbound stream and pushed to the client as events.

Lifecycle: ``open_session`` -> OPEN -> ``close_session`` -> CLOSED. A closed
or unknown session id raises ``SessionNotFoundError`` on lookup.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Union
from uuid import uuid4

import anyio
from mcp.server import Server
from mcp.shared.message import SessionMessage
from mcp.types import JSONRPCMessage
from pydantic import ValidationError as PydanticValidationError

from documents_mcp.exceptions import (
    InvalidSessionStateError,
    MessageParseError,
    SessionNotFoundError,
)
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.registry import ToolRegistry
from documents_mcp.mcp_server.server import create_server

ServerFactory = Callable[[ToolRegistry, Logger], Server]

INBOUND_BUFFER_SIZE = 16
OUTBOUND_BUFFER_SIZE = 16


class SessionState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


def parse_message(message: Union[JSONRPCMessage, Mapping[str, Any], str, bytes]) -> JSONRPCMessage:
    """Coerce a published payload into a JSON-RPC message."""
    if isinstance(message, JSONRPCMessage):
        return message
    try:
        if isinstance(message, (str, bytes, bytearray)):
            return JSONRPCMessage.model_validate_json(message)
        return JSONRPCMessage.model_validate(message)
    except PydanticValidationError as exc:
        errors = exc.errors()
        reason = errors[0]["msg"] if errors else "unrecognised payload"
        raise MessageParseError(
            f"Invalid JSON-RPC message: {reason}",
            details={"error_count": len(errors)},
        ) from exc


class Session:
    """One open event-stream connection and its protocol server."""

    def __init__(self, session_id: str, server: Server):
        self.session_id = session_id
        self.server = server
        self.state = SessionState.OPEN
        self._serving = False
        self._inbound_writer, self._inbound_reader = anyio.create_memory_object_stream(
            INBOUND_BUFFER_SIZE
        )
        self._outbound_writer, self._outbound_reader = anyio.create_memory_object_stream(
            OUTBOUND_BUFFER_SIZE
        )

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    async def serve(self) -> None:
        """Run the protocol server until the inbound stream is closed."""
        if self._serving:
            raise InvalidSessionStateError(
                f"Session '{self.session_id}' is already being served",
                details={"state": self.state.value},
            )
        if not self.is_open:
            return
        self._serving = True
        await self.server.run(
            self._inbound_reader,
            self._outbound_writer,
            self.server.create_initialization_options(),
        )

    async def send(self, message: JSONRPCMessage) -> None:
        if not self.is_open:
            raise SessionNotFoundError(self.session_id)
        try:
            await self._inbound_writer.send(SessionMessage(message=message))
        except (anyio.ClosedResourceError, anyio.BrokenResourceError) as exc:
            raise SessionNotFoundError(self.session_id) from exc

    async def outgoing(self) -> AsyncIterator[SessionMessage]:
        """Yield server-to-client messages until the server stops or the session closes."""
        try:
            async for message in self._outbound_reader:
                yield message
        except anyio.ClosedResourceError:
            return

    def close(self) -> None:
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED
        # The transport owns these two ends; a running server sees end of
        # input and closes the other two itself
        self._inbound_writer.close()
        self._outbound_reader.close()
        if not self._serving:
            self._inbound_reader.close()
            self._outbound_writer.close()


class SessionManager:
    """Table of open sessions keyed by server-generated id."""

    def __init__(
        self,
        registry: ToolRegistry,
        server_factory: ServerFactory = create_server,
        logger: Logger = session_logger,
    ):
        self.registry = registry
        self.server_factory = server_factory
        self.logger = logger
        self._sessions: Dict[str, Session] = {}

    def open_session(self) -> Session:
        session_id = uuid4().hex
        while session_id in self._sessions:
            session_id = uuid4().hex

        session = Session(session_id, self.server_factory(self.registry, self.logger))
        self._sessions[session_id] = session
        self.logger.info(
            "Session opened",
            session_id=session_id,
            active_sessions=len(self._sessions),
        )
        return session

    def close_session(self, session_id: str) -> None:
        """Forget a session. Unknown or already closed ids are ignored."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        session.close()
        self.logger.info(
            "Session closed",
            session_id=session_id,
            active_sessions=len(self._sessions),
        )

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close_session(session_id)

    def get(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None or not session.is_open:
            raise SessionNotFoundError(session_id)
        return session

    async def route(
        self,
        session_id: str,
        message: Union[JSONRPCMessage, Mapping[str, Any], str, bytes],
    ) -> None:
        """Queue ``message`` for the session's protocol server.

        The reply is delivered asynchronously on the session's event stream.

        Raises:
            SessionNotFoundError: unknown, closed or concurrently closed id
            MessageParseError: payload is not a JSON-RPC message
        """
        session = self.get(session_id)
        parsed = parse_message(message)
        await session.send(parsed)
        self.logger.debug("Message routed", session_id=session_id)

    def session_ids(self) -> List[str]:
        return list(self._sessions)

    @property
    def active_count(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
