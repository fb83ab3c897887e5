"""Document tools and the registry that exposes them."""

from __future__ import annotations

from typing import List

from documents_mcp.contracts.inputs import (
    CreateDocxInput,
    CreatePdfInput,
    CreatePptxInput,
    ReadDocxInput,
    ReadPdfInput,
    ReadPptxInput,
)
from documents_mcp.logger import Logger, session_logger
from documents_mcp.mcp_server.registry import ToolDescriptor, ToolRegistry
from documents_mcp.tools import create_docx, create_pdf, create_pptx, read_docx, read_pdf, read_pptx


def tool_descriptors() -> List[ToolDescriptor]:
    """Descriptors for every document tool, in advertised order."""
    return [
        ToolDescriptor(create_pdf.NAME, create_pdf.DESCRIPTION, CreatePdfInput, create_pdf.create_pdf),
        ToolDescriptor(
            create_docx.NAME, create_docx.DESCRIPTION, CreateDocxInput, create_docx.create_docx
        ),
        ToolDescriptor(
            create_pptx.NAME, create_pptx.DESCRIPTION, CreatePptxInput, create_pptx.create_pptx
        ),
        ToolDescriptor(read_pdf.NAME, read_pdf.DESCRIPTION, ReadPdfInput, read_pdf.read_pdf),
        ToolDescriptor(read_docx.NAME, read_docx.DESCRIPTION, ReadDocxInput, read_docx.read_docx),
        ToolDescriptor(read_pptx.NAME, read_pptx.DESCRIPTION, ReadPptxInput, read_pptx.read_pptx),
    ]


def build_registry(logger: Logger = session_logger) -> ToolRegistry:
    """Build the frozen registry shared by every transport."""
    registry = ToolRegistry(logger=logger).register_all(tool_descriptors()).freeze()
    logger.info("Tool registry built", tools=registry.names())
    return registry


__all__ = ["build_registry", "tool_descriptors"]
