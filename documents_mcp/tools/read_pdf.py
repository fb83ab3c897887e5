"""read-pdf: metadata and text extraction with pypdf."""

from __future__ import annotations

import io
import re
from typing import Optional, Tuple, Union

from pypdf import PdfReader

from documents_mcp.ai import analysis
from documents_mcp.contracts.inputs import ReadPdfInput
from documents_mcp.contracts.results import PdfMetadata, ReadPdfResult, ToolFailure
from documents_mcp.logger import session_logger
from documents_mcp.tools.common import check_signature, load_source

NAME = "read-pdf"
DESCRIPTION = (
    "Extract text content and metadata from a PDF file. "
    "Can also perform AI analysis if a prompt is provided."
)

PDF_SIGNATURE = b"%PDF-"
NO_TEXT_PLACEHOLDER = (
    "[Text extraction limited - PDF may contain only images or use complex encoding]"
)
EXTRACTION_NOTE = (
    "Text is extracted from the PDF content streams. Scanned pages and "
    "image-only content are not recognised; use a prompt for AI analysis instead."
)

_VERSION_PATTERN = re.compile(rb"%PDF-(\d+\.\d+)")


def _text_or_none(value) -> Optional[str]:
    return str(value) if value else None


def _parse(data: bytes) -> Tuple[PdfMetadata, str]:
    reader = PdfReader(io.BytesIO(data))
    if reader.is_encrypted:
        reader.decrypt("")

    match = _VERSION_PATTERN.match(data)
    info = reader.metadata
    metadata = PdfMetadata(
        pdf_version=match.group(1).decode("ascii") if match else "unknown",
        page_count=len(reader.pages),
        file_size_bytes=len(data),
        title=_text_or_none(info.title) if info else None,
        author=_text_or_none(info.author) if info else None,
    )
    pages = [page.extract_text() or "" for page in reader.pages]
    return metadata, "\n\n".join(text.strip() for text in pages if text.strip())


async def read_pdf(request: ReadPdfInput) -> Union[ReadPdfResult, ToolFailure]:
    data = load_source(request)
    if isinstance(data, ToolFailure):
        return data

    failure = check_signature(data, PDF_SIGNATURE, "Invalid PDF file: Missing %PDF header")
    if failure:
        return failure

    try:
        metadata, text = _parse(data)
    except Exception as exc:
        session_logger.warning(
            "PDF parsing failed", error_type=type(exc).__name__, error=str(exc)
        )
        return ToolFailure(error=f"Failed to parse PDF: {exc}")

    ai_analysis = None
    if request.prompt:
        ai_analysis = await analysis.analyze_document(data, "application/pdf", request.prompt)

    session_logger.info(
        "PDF read",
        page_count=metadata.page_count,
        characters=len(text),
        ai_analysis=ai_analysis is not None,
    )
    return ReadPdfResult(
        metadata=metadata,
        text=text or NO_TEXT_PLACEHOLDER,
        note=EXTRACTION_NOTE,
        ai_analysis=ai_analysis,
    )
