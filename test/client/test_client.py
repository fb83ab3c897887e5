"""Tests for the documents-mcp client over both transports."""

import base64
import socket
import sys
import threading
import time
from pathlib import Path

import pytest
import uvicorn
from mcp.types import CallToolResult, ImageContent, TextContent

from documents_mcp.client import DocumentsMcpClient, create_client, unwrap_result
from documents_mcp.exceptions import ClientConfigurationError, ClientNotConnectedError
from documents_mcp.transports import DocumentsHttpServer

PROJECT_ROOT = Path(__file__).parent.parent.parent

EXPECTED_TOOLS = [
    "create-pdf",
    "create-docx",
    "create-pptx",
    "read-pdf",
    "read-docx",
    "read-pptx",
]


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def stdio_client():
    return DocumentsMcpClient(
        "stdio",
        command=sys.executable,
        args=["-m", "documents_mcp", "--transport", "stdio"],
        cwd=str(PROJECT_ROOT),
    )


@pytest.fixture
def sse_url(registry, reset_sse_exit_event):
    """Run the HTTP transport under uvicorn in a background thread."""
    port = free_port()
    config = uvicorn.Config(
        DocumentsHttpServer(registry).app,
        host="127.0.0.1",
        port=port,
        log_level="warning",
        timeout_graceful_shutdown=2,
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline or not thread.is_alive():
            raise RuntimeError("HTTP transport did not start")
        time.sleep(0.05)

    yield f"http://127.0.0.1:{port}/sse"

    server.should_exit = True
    thread.join(timeout=10)


class TestUnwrapResult:
    """Tool replies are decoded from their JSON text envelope."""

    def test_json_object_reports_its_own_success(self):
        result = unwrap_result(text_result('{"success": true, "pageCount": 2}'))

        assert result.success is True
        assert result.content == {"success": True, "pageCount": 2}

    def test_failure_envelope(self):
        raw = text_result('{"success": false, "error": "boom"}', is_error=True)

        result = unwrap_result(raw)

        assert result.success is False
        assert result.content["error"] == "boom"
        assert result.raw is raw

    def test_object_without_success_flag_uses_is_error(self):
        assert unwrap_result(text_result('{"note": "hi"}')).success is True
        assert unwrap_result(text_result('{"note": "hi"}', is_error=True)).success is False

    def test_plain_text_is_passed_through(self):
        result = unwrap_result(text_result("not json at all"))

        assert result.success is True
        assert result.content == "not json at all"

    def test_reply_without_text_part(self):
        image = ImageContent(type="image", data="aGk=", mimeType="image/png")
        raw = CallToolResult(content=[image])

        result = unwrap_result(raw)

        assert result.success is True
        assert result.content == [image]


class TestClientOptions:
    def test_sse_requires_url(self):
        with pytest.raises(ClientConfigurationError) as exc_info:
            create_client("sse")

        assert str(exc_info.value) == "URL is required for SSE transport"

    def test_unknown_transport(self):
        with pytest.raises(ClientConfigurationError) as exc_info:
            create_client("websocket")

        assert str(exc_info.value) == "Unknown transport: websocket"

    def test_factory_defaults_to_stdio(self):
        client = create_client()

        assert client.transport == "stdio"
        assert client.command == "documents-mcp"
        assert client.connected is False

    async def test_calls_before_connect_are_rejected(self):
        client = create_client("sse", url="http://localhost:3000/sse")

        with pytest.raises(ClientNotConnectedError):
            await client.list_tools()
        with pytest.raises(ClientNotConnectedError):
            await client.read_pdf({"filePath": "report.pdf"})

    async def test_disconnect_without_connect_is_harmless(self):
        client = create_client()

        await client.disconnect()

        assert client.connected is False


class TestStdioClient:
    """The client spawns the server and talks to it over stdin/stdout."""

    async def test_list_tools(self, stdio_client):
        async with stdio_client:
            assert stdio_client.connected
            tools = await stdio_client.list_tools()

        assert [tool.name for tool in tools] == EXPECTED_TOOLS
        assert all(tool.description for tool in tools)
        assert stdio_client.connected is False

    async def test_read_pdf(self, stdio_client, sample_pdf):
        async with stdio_client:
            result = await stdio_client.read_pdf(
                {"base64Content": base64.b64encode(sample_pdf).decode()}
            )

        assert result.success is True
        assert result.content["metadata"]["title"] == "Quarterly Report"
        assert "Revenue grew steadily" in result.content["text"]

    async def test_failure_is_unwrapped(self, stdio_client):
        async with stdio_client:
            result = await stdio_client.read_docx({})

        assert result.success is False
        assert result.raw.isError is True
        assert result.content["error"] == "Either filePath or base64Content must be provided"


class TestSseClient:
    """The client opens an event stream and publishes to the announced URL."""

    async def test_list_tools(self, sse_url):
        async with create_client("sse", url=sse_url) as client:
            tools = await client.list_tools()

        assert [tool.name for tool in tools] == EXPECTED_TOOLS

    async def test_create_pptx_returns_base64(self, sse_url):
        async with create_client("sse", url=sse_url) as client:
            result = await client.create_pptx(
                {"title": "Roadmap", "slides": [{"title": "Welcome", "layout": "title"}]}
            )

        assert result.success is True
        assert result.content["slideCount"] == 1
        assert base64.b64decode(result.content["base64"]).startswith(b"PK")

    async def test_sequential_calls_on_one_connection(self, sse_url, sample_docx):
        encoded = base64.b64encode(sample_docx).decode()

        async with create_client("sse", url=sse_url) as client:
            first = await client.read_docx({"base64Content": encoded, "outputFormat": "text"})
            second = await client.read_pptx({"base64Content": encoded})

        assert first.success is True
        assert "Budget review for next year" in first.content["text"]
        assert second.success is False
        assert second.content["error"].startswith("Failed to parse PPTX: ")
