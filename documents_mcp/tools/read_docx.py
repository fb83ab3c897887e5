"""read-docx: text and HTML extraction with mammoth."""

from __future__ import annotations

import io
from typing import Union

import mammoth

from documents_mcp.ai import analysis
from documents_mcp.contracts.inputs import ReadDocxInput
from documents_mcp.contracts.results import ConversionMessage, ReadDocxResult, ToolFailure
from documents_mcp.logger import session_logger
from documents_mcp.tools.common import PK_SIGNATURE, check_signature, load_source

NAME = "read-docx"
DESCRIPTION = (
    "Extract text content from a DOCX (Word) file. "
    "Can also perform AI analysis if a prompt is provided."
)


async def read_docx(request: ReadDocxInput) -> Union[ReadDocxResult, ToolFailure]:
    data = load_source(request)
    if isinstance(data, ToolFailure):
        return data

    failure = check_signature(data, PK_SIGNATURE, "Invalid DOCX file: Missing PK signature")
    if failure:
        return failure

    wants_text = request.output_format in ("text", "both")
    wants_html = request.output_format in ("html", "both")
    fields = {}
    extracted = ""

    try:
        # Text is also needed for analysis when only HTML is requested
        if wants_text or request.prompt:
            extracted = mammoth.extract_raw_text(io.BytesIO(data)).value
            if wants_text:
                fields["text"] = extracted
                fields["character_count"] = len(extracted)
                fields["word_count"] = len(extracted.split())

        if wants_html:
            converted = mammoth.convert_to_html(io.BytesIO(data))
            fields["html"] = converted.value
            fields["messages"] = [
                ConversionMessage(type=message.type, message=message.message)
                for message in converted.messages
            ]
    except Exception as exc:
        session_logger.warning(
            "DOCX parsing failed", error_type=type(exc).__name__, error=str(exc)
        )
        return ToolFailure(error=f"Failed to parse DOCX: {exc}")

    if request.prompt and extracted:
        fields["ai_analysis"] = await analysis.analyze_document(
            extracted, "text/plain", request.prompt
        )

    session_logger.info(
        "DOCX read",
        output_format=request.output_format,
        characters=len(extracted),
        ai_analysis="ai_analysis" in fields,
    )
    return ReadDocxResult(**fields)
