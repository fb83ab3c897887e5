"""MCP server response helpers.

This module holds the helpers that turn tool outcomes into the protocol's
``CallToolResult``:
- JSON serialization helpers
- the result-to-envelope conversion
- ``adapt``, which validates, invokes and wraps a single handler call

Every envelope has exactly one text content part holding the JSON result
and ``isError`` set to ``not success``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Type

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel

from documents_mcp.contracts.base import Contract, ContractViolation, validate
from documents_mcp.contracts.results import ToolFailure
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.tool_types import ToolHandler, ToolResult


def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for non-standard types."""
    # Handle Pydantic models
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(obj, (bytes, bytearray)):
        return obj.decode("latin-1")
    # Handle dataclasses and regular objects
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    # Fallback
    return str(obj)


def _json_text(payload: Dict[str, Any]) -> TextContent:
    return TextContent(
        type="text",
        text=json.dumps(payload, indent=2, ensure_ascii=True, default=_json_serializer),
    )


def _payload(result: ToolResult) -> Dict[str, Any]:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(result, Mapping):
        return dict(result)
    return ToolFailure(
        error=f"Tool returned an unsupported result type: {type(result).__name__}"
    ).to_payload()


def envelope(payload: Dict[str, Any]) -> CallToolResult:
    return CallToolResult(
        content=[_json_text(payload)],
        isError=payload.get("success") is not True,
    )


def failure_envelope(error: str) -> CallToolResult:
    return envelope(ToolFailure(error=error).to_payload())


def render_envelope(result: ToolResult) -> CallToolResult:
    """Serialise a handler result verbatim into a response envelope."""
    return envelope(_payload(result))


async def adapt(
    contract: Type[Contract],
    handler: ToolHandler,
    raw_input: Any,
    *,
    tool: Optional[str] = None,
    logger: Logger = session_logger,
) -> CallToolResult:
    """Validate ``raw_input``, run ``handler`` and wrap the outcome.

    The handler is never invoked for input that fails its contract. Any
    exception escaping the handler (or its result's serialisation) becomes a
    ``success: false`` envelope; this coroutine does not raise.
    """
    validated = validate(contract, raw_input)
    if isinstance(validated, ContractViolation):
        logger.warning(
            "Payload validation error",
            tool=tool,
            contract=validated.contract,
            fields=list(validated.fields),
        )
        return failure_envelope(validated.message)

    try:
        result = await handler(validated)
        response = render_envelope(result)
    except Exception as exc:
        logger.error(
            "Unexpected tool failure",
            tool=tool,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return failure_envelope(str(exc) or type(exc).__name__)

    if response.isError:
        logger.warning("Tool reported failure", tool=tool)
    else:
        logger.info("Tool completed successfully", tool=tool)
    return response


def envelope_payload(response: CallToolResult) -> Any:
    """Decode the payload carried by an envelope's first text part.

    Returns the raw text when it is not JSON, and ``None`` when the
    envelope has no text part at all.
    """
    for part in response.content:
        if isinstance(part, TextContent):
            try:
                return json.loads(part.text)
            except json.JSONDecodeError:
                return part.text
    return None
