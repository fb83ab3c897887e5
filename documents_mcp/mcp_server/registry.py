"""Tool registry and dispatch.

The registry maps a tool name to its contract, handler and description. It
is built once at startup, frozen, and handed explicitly to every transport
and every per-session protocol server.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Type

from mcp.types import CallToolResult, Tool

from documents_mcp.contracts.base import Contract, describe
from documents_mcp.exceptions import RegistryError
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.responses import adapt, failure_envelope
from documents_mcp.mcp_server.tool_types import ToolHandler


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    contract: Type[Contract]
    handler: ToolHandler

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=describe(self.contract),
        )


@dataclass(frozen=True)
class ToolSummary:
    name: str
    description: str


class ToolRegistry:
    """Ordered, name-unique collection of tool descriptors.

    Duplicate names are rejected. Once ``freeze`` has been called no further
    registrations are accepted.
    """

    def __init__(self, logger: Logger = session_logger):
        self._descriptors: Dict[str, ToolDescriptor] = {}
        self._frozen = False
        self.logger = logger

    def register(self, descriptor: ToolDescriptor) -> None:
        if self._frozen:
            raise RegistryError(
                code="REGISTRY_FROZEN",
                message=f"Cannot register '{descriptor.name}': the tool registry is frozen",
            )
        if not descriptor.name:
            raise RegistryError(code="INVALID_TOOL", message="Tool descriptors must have a name")
        if descriptor.name in self._descriptors:
            raise RegistryError(
                code="DUPLICATE_TOOL",
                message=f"Tool '{descriptor.name}' is already registered",
                details={"tool": descriptor.name},
            )
        self._descriptors[descriptor.name] = descriptor
        self.logger.debug("Registered tool", tool=descriptor.name)

    def register_all(self, descriptors: Iterable[ToolDescriptor]) -> "ToolRegistry":
        for descriptor in descriptors:
            self.register(descriptor)
        return self

    def freeze(self) -> "ToolRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> ToolDescriptor:
        return self._descriptors[name]

    def names(self) -> List[str]:
        return list(self._descriptors)

    def list_tools(self) -> List[ToolSummary]:
        """Name/description pairs in registration order."""
        return [
            ToolSummary(name=descriptor.name, description=descriptor.description)
            for descriptor in self._descriptors.values()
        ]

    def tools(self) -> List[Tool]:
        """Discovery view: one MCP ``Tool`` with its JSON Schema per descriptor."""
        return [descriptor.to_tool() for descriptor in self._descriptors.values()]

    async def dispatch(self, name: str, raw_input: Any) -> CallToolResult:
        self.logger.info("Tool invocation started", tool=name)

        descriptor = self._descriptors.get(name)
        if descriptor is None:
            available_tools = self.names()
            self.logger.error("Unknown tool requested", tool=name, available_tools=available_tools)
            return failure_envelope(
                f"Unknown tool '{name}'. Available tools: {', '.join(available_tools)}"
            )

        return await adapt(
            descriptor.contract,
            descriptor.handler,
            raw_input,
            tool=name,
            logger=self.logger,
        )

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
