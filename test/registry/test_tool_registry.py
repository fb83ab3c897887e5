"""Tests for the tool registry and dispatch."""

import pytest
from mcp.types import CallToolRequest, ListToolsRequest

from documents_mcp.contracts import Contract
from documents_mcp.exceptions import RegistryError
from documents_mcp.mcp_server import ToolDescriptor, ToolRegistry, create_server
from documents_mcp.mcp_server.responses import envelope_payload

EXPECTED_TOOLS = [
    "create-pdf",
    "create-docx",
    "create-pptx",
    "read-pdf",
    "read-docx",
    "read-pptx",
]


class PingInput(Contract):
    target: str = "world"


async def ping(validated: PingInput):
    return {"success": True, "pong": validated.target}


def ping_descriptor(name: str = "ping") -> ToolDescriptor:
    return ToolDescriptor(name=name, description="Reply with pong", contract=PingInput, handler=ping)


class TestBuildRegistry:
    """The production registry exposes the six document tools."""

    def test_tools_in_registration_order(self, registry):
        assert registry.names() == EXPECTED_TOOLS

    def test_registry_is_frozen(self, registry):
        assert registry.frozen is True

    def test_list_tools_pairs(self, registry):
        summaries = registry.list_tools()

        assert [summary.name for summary in summaries] == EXPECTED_TOOLS
        assert all(summary.description for summary in summaries)

    def test_discovery_view_carries_schemas(self, registry):
        tools = registry.tools()

        assert [tool.name for tool in tools] == EXPECTED_TOOLS
        for tool in tools:
            assert tool.inputSchema["type"] == "object"
            assert tool.inputSchema["properties"]


class TestRegistration:
    """Names are unique and the registry cannot grow after freezing."""

    def test_register_and_lookup(self):
        registry = ToolRegistry()
        registry.register(ping_descriptor())

        assert "ping" in registry
        assert len(registry) == 1
        assert registry.get("ping").description == "Reply with pong"

    def test_duplicate_name_is_rejected(self):
        registry = ToolRegistry()
        registry.register(ping_descriptor())

        with pytest.raises(RegistryError) as exc_info:
            registry.register(ping_descriptor())

        assert exc_info.value.code == "DUPLICATE_TOOL"
        assert len(registry) == 1

    def test_empty_name_is_rejected(self):
        with pytest.raises(RegistryError) as exc_info:
            ToolRegistry().register(ping_descriptor(name=""))
        assert exc_info.value.code == "INVALID_TOOL"

    def test_register_after_freeze_is_rejected(self):
        registry = ToolRegistry().register_all([ping_descriptor()]).freeze()

        with pytest.raises(RegistryError) as exc_info:
            registry.register(ping_descriptor("ping-2"))

        assert exc_info.value.code == "REGISTRY_FROZEN"
        assert registry.names() == ["ping"]


class TestDispatch:
    """dispatch routes by name and always answers with an envelope."""

    async def test_dispatch_known_tool(self):
        registry = ToolRegistry().register_all([ping_descriptor()]).freeze()

        response = await registry.dispatch("ping", {"target": "docs"})

        assert response.isError is False
        assert envelope_payload(response) == {"success": True, "pong": "docs"}

    async def test_unknown_tool_lists_available_tools(self, registry):
        response = await registry.dispatch("create-xlsx", {})

        assert response.isError is True
        assert envelope_payload(response) == {
            "success": False,
            "error": "Unknown tool 'create-xlsx'. Available tools: " + ", ".join(EXPECTED_TOOLS),
        }

    async def test_invalid_arguments_never_reach_handler(self, registry):
        response = await registry.dispatch("create-pdf", {"content": []})

        payload = envelope_payload(response)
        assert payload["success"] is False
        assert "title" in payload["error"]

    async def test_read_tool_without_source(self, registry):
        response = await registry.dispatch("read-docx", {"outputFormat": "text"})

        assert envelope_payload(response) == {
            "success": False,
            "error": "Either filePath or base64Content must be provided",
        }


class TestCreateServer:
    """Each protocol server answers discovery and tool calls from the registry."""

    def test_registers_list_and_call_handlers(self, registry):
        server = create_server(registry)

        assert ListToolsRequest in server.request_handlers
        assert CallToolRequest in server.request_handlers

    def test_servers_are_independent(self, registry):
        assert create_server(registry) is not create_server(registry)
