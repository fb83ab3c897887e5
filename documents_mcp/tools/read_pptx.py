"""read-pptx: per-slide text extraction with python-pptx."""

from __future__ import annotations

import io
from typing import Iterator, List, Union

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE

from documents_mcp.ai import analysis
from documents_mcp.contracts.inputs import ReadPptxInput
from documents_mcp.contracts.results import ReadPptxResult, SlideText, ToolFailure
from documents_mcp.logger import session_logger
from documents_mcp.tools.common import PK_SIGNATURE, check_signature, load_source

NAME = "read-pptx"
DESCRIPTION = (
    "Extract text content from a PPTX (PowerPoint) file. "
    "Can also perform AI analysis if a prompt is provided."
)


def _frame_runs(text_frame) -> Iterator[str]:
    for paragraph in text_frame.paragraphs:
        for run in paragraph.runs:
            yield run.text


def _shape_runs(shape) -> Iterator[str]:
    """Text runs of a shape in document order, descending into groups and tables."""
    if shape.shape_type == MSO_SHAPE_TYPE.GROUP:
        for child in shape.shapes:
            yield from _shape_runs(child)
        return
    if shape.has_text_frame:
        yield from _frame_runs(shape.text_frame)
    if shape.has_table:
        for row in shape.table.rows:
            for cell in row.cells:
                yield from _frame_runs(cell.text_frame)


def extract_slides(data: bytes) -> List[SlideText]:
    presentation = Presentation(io.BytesIO(data))
    slides = []
    for number, slide in enumerate(presentation.slides, start=1):
        runs = [text for shape in slide.shapes for text in _shape_runs(shape) if text]
        slides.append(SlideText(slide=number, text=" ".join(runs)))
    return slides


async def read_pptx(request: ReadPptxInput) -> Union[ReadPptxResult, ToolFailure]:
    data = load_source(request)
    if isinstance(data, ToolFailure):
        return data

    failure = check_signature(data, PK_SIGNATURE, "Invalid PPTX file: Missing PK signature")
    if failure:
        return failure

    try:
        slides = extract_slides(data)
    except Exception as exc:
        session_logger.warning(
            "PPTX parsing failed", error_type=type(exc).__name__, error=str(exc)
        )
        return ToolFailure(error=f"Failed to parse PPTX: {exc}")

    full_text = "".join(f"Slide {item.slide}:\n{item.text}\n\n" for item in slides)

    ai_analysis = None
    if request.prompt and full_text:
        ai_analysis = await analysis.analyze_document(full_text, "text/plain", request.prompt)

    session_logger.info(
        "PPTX read",
        slide_count=len(slides),
        ai_analysis=ai_analysis is not None,
    )
    return ReadPptxResult(
        slide_count=len(slides),
        slides=slides,
        text=full_text.strip(),
        ai_analysis=ai_analysis,
    )
