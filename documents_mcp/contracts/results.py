"""Result variants returned by document tools.

Each tool family has its own success model; every family shares
``ToolFailure``. They only meet in ``render_envelope``, where they are
serialised to the ``{success, ...}`` JSON text clients receive.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ToolFailure(ResultModel):
    success: Literal[False] = False
    error: str


class AiAnalysis(ResultModel):
    success: bool
    text: Optional[str] = None
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# create-*
# ---------------------------------------------------------------------------


class CreateDocumentResult(ResultModel):
    success: Literal[True] = True
    message: str
    file_path: Optional[str] = None
    base64: Optional[str] = None


class CreatePdfResult(CreateDocumentResult):
    page_count: int


class CreateDocxResult(CreateDocumentResult):
    pass


class CreatePptxResult(CreateDocumentResult):
    slide_count: int


# ---------------------------------------------------------------------------
# read-*
# ---------------------------------------------------------------------------


class PdfMetadata(ResultModel):
    pdf_version: str
    page_count: int
    file_size_bytes: int
    title: Optional[str] = None
    author: Optional[str] = None


class ReadPdfResult(ResultModel):
    success: Literal[True] = True
    metadata: PdfMetadata
    text: str
    note: Optional[str] = None
    ai_analysis: Optional[AiAnalysis] = None


class ConversionMessage(ResultModel):
    type: str
    message: str


class ReadDocxResult(ResultModel):
    success: Literal[True] = True
    text: Optional[str] = None
    html: Optional[str] = None
    messages: Optional[List[ConversionMessage]] = None
    character_count: Optional[int] = None
    word_count: Optional[int] = None
    ai_analysis: Optional[AiAnalysis] = None


class SlideText(ResultModel):
    slide: int
    text: str


class ReadPptxResult(ResultModel):
    success: Literal[True] = True
    slide_count: int
    slides: List[SlideText]
    text: str
    ai_analysis: Optional[AiAnalysis] = None
