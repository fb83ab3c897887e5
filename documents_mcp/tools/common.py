"""Helpers shared by the document tools: loading sources, writing outputs."""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from typing import Optional, Union

from documents_mcp.config import Config
from documents_mcp.contracts.inputs import ReadSourceInput
from documents_mcp.contracts.results import ToolFailure

PK_SIGNATURE = b"PK"


def decode_base64(content: str) -> bytes:
    """Strictly decode base64, ignoring embedded whitespace.

    Raises:
        binascii.Error: content is not valid base64
    """
    return base64.b64decode("".join(content.split()), validate=True)


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def load_source(source: ReadSourceInput) -> Union[bytes, ToolFailure]:
    """Read the document bytes named by ``filePath`` or ``base64Content``.

    A file path takes precedence when both are given. Relative paths
    resolve against the working directory.
    """
    if source.file_path:
        path = Path(source.file_path).expanduser()
        try:
            return path.resolve().read_bytes()
        except OSError as exc:
            return ToolFailure(error=f"Failed to read file: {exc}")

    try:
        return decode_base64(source.base64_content or "")
    except (binascii.Error, ValueError) as exc:
        return ToolFailure(error=f"Failed to decode base64 content: {exc}")


def check_signature(data: bytes, signature: bytes, error: str) -> Optional[ToolFailure]:
    if not data.startswith(signature):
        return ToolFailure(error=error)
    return None


def resolve_output_path(output_path: str) -> Path:
    path = Path(output_path).expanduser()
    if not path.is_absolute():
        path = Config.get_output_dir() / path
    return path.resolve()


def write_output(data: bytes, output_path: str) -> Path:
    """Write ``data`` to ``output_path``, creating parent directories.

    Raises:
        OSError: the file could not be written
    """
    path = resolve_output_path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def deliver(data: bytes, output_path: Optional[str], kind: str) -> Union[dict, ToolFailure]:
    """Save or encode a generated document.

    Returns the ``message`` plus either ``file_path`` or ``base64`` fields
    for a create-* result, or a failure when the file cannot be written.
    """
    if output_path:
        try:
            path = write_output(data, output_path)
        except OSError as exc:
            return ToolFailure(error=f"Failed to write file: {exc}")
        return {"message": f"{kind} created successfully", "file_path": str(path)}

    return {
        "message": f"{kind} created successfully",
        "base64": encode_base64(data),
    }
