"""HTTP transport: event-stream sessions plus a publish endpoint.

Endpoints:
    GET  /sse                      - open an event stream; allocates a session
    POST /messages?sessionId=<id>  - publish one JSON-RPC message to a session
    GET  /health                   - liveness and introspection
    GET  /                         - static self-description

The first event on every stream is ``endpoint`` with the URL to publish to.
Each reply from the session's protocol server follows as a ``message`` event.
"""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, Optional

import anyio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse
from starlette.types import Receive, Scope, Send

from documents_mcp.config_docs import (
    DEFAULT_HTTP_HOST,
    SERVER_DESCRIPTION,
    SERVER_NAME,
    SERVER_VERSION,
)
from documents_mcp.exceptions import MessageParseError, SessionNotFoundError
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.registry import ToolRegistry
from documents_mcp.sessions import SessionManager

SSE_PATH = "/sse"
MESSAGES_PATH = "/messages"
HEALTH_PATH = "/health"


class SubscribeEndpoint:
    """Raw ASGI endpoint that holds one event stream open per session."""

    def __init__(self, sessions: SessionManager, messages_path: str, logger: Logger):
        self.sessions = sessions
        self.messages_path = messages_path
        self.logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        session = self.sessions.open_session()
        session_id = session.session_id
        endpoint = f"{self.messages_path}?sessionId={session_id}"
        event_writer, event_reader = anyio.create_memory_object_stream(0)

        async def publish_events() -> None:
            async with event_writer:
                await event_writer.send({"event": "endpoint", "data": endpoint})
                async for message in session.outgoing():
                    await event_writer.send(
                        {
                            "event": "message",
                            "data": message.message.model_dump_json(
                                by_alias=True, exclude_none=True
                            ),
                        }
                    )

        self.logger.info("New SSE connection", session_id=session_id)
        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(session.serve)
                response = EventSourceResponse(event_reader, data_sender_callable=publish_events)
                await response(scope, receive, send)
                # Client went away; the server finishes in-flight work and stops
                self.sessions.close_session(session_id)
        except Exception as exc:
            self.logger.error(
                "SSE connection failed",
                session_id=session_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        finally:
            self.sessions.close_session(session_id)
            self.logger.info("SSE connection closed", session_id=session_id)


class DocumentsHttpServer:
    """FastAPI application exposing the tool registry over SSE sessions."""

    def __init__(
        self,
        registry: ToolRegistry,
        sessions: Optional[SessionManager] = None,
        logger: Logger = session_logger,
    ):
        """
        Initialize the HTTP server.

        Args:
            registry: Frozen tool registry shared by every session
            sessions: Session table (a new one bound to ``registry`` if None)
            logger: Logger instance
        """
        self.registry = registry
        self.logger = logger
        self.sessions = sessions or SessionManager(registry, logger=logger)
        self.app = FastAPI(
            title=SERVER_NAME,
            description=SERVER_DESCRIPTION,
            version=SERVER_VERSION,
            lifespan=self._lifespan,
        )
        self._setup_routes()

    @contextlib.asynccontextmanager
    async def _lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        self.logger.info("HTTP transport ready", tools=self.registry.names())
        yield
        self.sessions.close_all()
        self.logger.info("HTTP transport stopped")

    def _setup_routes(self) -> None:
        self.app.add_route(
            SSE_PATH,
            SubscribeEndpoint(self.sessions, MESSAGES_PATH, self.logger),
            methods=["GET"],
            include_in_schema=False,
        )

        @self.app.post(MESSAGES_PATH)
        async def post_message(request: Request) -> JSONResponse:
            session_id = request.query_params.get("sessionId")
            if not session_id:
                self.logger.warning("POST /messages without sessionId", status=400)
                return JSONResponse(
                    status_code=400, content={"error": "Missing sessionId query parameter"}
                )

            try:
                body = await request.body()
                await self.sessions.route(session_id, body)
            except SessionNotFoundError:
                self.logger.warning("Session not found", session_id=session_id, status=404)
                return JSONResponse(
                    status_code=404,
                    content={"error": "Session not found. Connect to /sse first."},
                )
            except MessageParseError as exc:
                self.logger.warning(
                    "Rejected malformed message", session_id=session_id, error=str(exc), status=400
                )
                return JSONResponse(status_code=400, content={"error": str(exc)})
            except Exception as exc:
                self.logger.error(
                    "Error handling message",
                    session_id=session_id,
                    error_type=type(exc).__name__,
                    error=str(exc),
                    status=500,
                )
                return JSONResponse(status_code=500, content={"error": "Internal server error"})

            return JSONResponse(content={"status": "accepted", "sessionId": session_id})

        @self.app.get(HEALTH_PATH)
        async def health() -> JSONResponse:
            return JSONResponse(
                content={
                    "status": "ok",
                    "server": SERVER_NAME,
                    "version": SERVER_VERSION,
                    "activeSessions": self.sessions.active_count,
                    "tools": self.registry.names(),
                }
            )

        @self.app.get("/")
        async def root() -> JSONResponse:
            return JSONResponse(
                content={
                    "name": SERVER_NAME,
                    "version": SERVER_VERSION,
                    "description": SERVER_DESCRIPTION,
                    "endpoints": {
                        "sse": f"GET {SSE_PATH} - SSE connection for MCP clients",
                        "messages": f"POST {MESSAGES_PATH}?sessionId=<id> - Send messages to server",
                        "health": f"GET {HEALTH_PATH} - Server health check",
                    },
                }
            )


async def serve_http(
    registry: ToolRegistry,
    host: str = DEFAULT_HTTP_HOST,
    port: int = 3000,
    logger: Logger = session_logger,
) -> None:
    import uvicorn

    server = DocumentsHttpServer(registry, logger=logger)
    logger.info("Starting Documents MCP HTTP server", host=host, port=port, sse=SSE_PATH)
    config = uvicorn.Config(server.app, host=host, port=port, log_level="info")
    await uvicorn.Server(config).serve()
