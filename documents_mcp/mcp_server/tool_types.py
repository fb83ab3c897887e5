from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Union

from documents_mcp.contracts.results import ResultModel

ToolResult = Union[ResultModel, Mapping[str, Any]]
ToolHandler = Callable[[Any], Awaitable[ToolResult]]
