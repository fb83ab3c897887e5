"""Input contracts for the document tools."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, model_validator
from pydantic_core import PydanticCustomError

from documents_mcp.contracts.base import Contract

MISSING_SOURCE_MESSAGE = "Either filePath or base64Content must be provided"

PageSize = Literal["A4", "Letter", "Legal"]
HexColor = Annotated[str, Field(pattern=r"^#?[0-9A-Fa-f]{6}$")]
HeadingLevel = Annotated[int, Field(ge=1, le=6)]

# ---------------------------------------------------------------------------
# Shared content items
# ---------------------------------------------------------------------------


class HeadingItem(Contract):
    type: Literal["heading"]
    content: str
    level: HeadingLevel = 1


class TableItem(Contract):
    type: Literal["table"]
    headers: List[str]
    rows: List[List[str]]


class PageBreakItem(Contract):
    type: Literal["pageBreak"]


# ---------------------------------------------------------------------------
# create-pdf
# ---------------------------------------------------------------------------


class RgbColor(Contract):
    r: float = Field(ge=0, le=1)
    g: float = Field(ge=0, le=1)
    b: float = Field(ge=0, le=1)


class PdfTextItem(Contract):
    type: Literal["text"]
    content: str
    font_size: float = Field(default=12, gt=0)
    bold: bool = False
    color: Optional[RgbColor] = None


class PdfImageItem(Contract):
    type: Literal["image"]
    base64: str
    format: Literal["png", "jpg", "jpeg"]
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)


PdfContentItem = Annotated[
    Union[PdfTextItem, HeadingItem, TableItem, PdfImageItem, PageBreakItem],
    Field(discriminator="type"),
]


class CreatePdfInput(Contract):
    title: str = Field(description="The title of the PDF document")
    author: Optional[str] = Field(default=None, description="The author of the document")
    content: List[PdfContentItem] = Field(
        description="Array of content items to include in the PDF"
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Optional file path to save the PDF. If not provided, returns base64",
    )
    page_size: PageSize = Field(default="A4", description="Page size for the document")


# ---------------------------------------------------------------------------
# create-docx
# ---------------------------------------------------------------------------


class DocxTextItem(Contract):
    type: Literal["text"]
    content: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    # Half-points, 24 == 12pt
    font_size: float = Field(default=24, gt=0)


class ParagraphItem(Contract):
    type: Literal["paragraph"]
    content: str
    alignment: Literal["left", "center", "right", "justified"] = "left"


class BulletListItem(Contract):
    type: Literal["bulletList"]
    items: List[str]


class NumberedListItem(Contract):
    type: Literal["numberedList"]
    items: List[str]


class DocxImageItem(Contract):
    type: Literal["image"]
    base64: str
    width: float = Field(default=400, gt=0)
    height: float = Field(default=300, gt=0)
    alt_text: str = "Image"


DocxContentItem = Annotated[
    Union[
        DocxTextItem,
        HeadingItem,
        ParagraphItem,
        BulletListItem,
        NumberedListItem,
        TableItem,
        DocxImageItem,
        PageBreakItem,
    ],
    Field(discriminator="type"),
]


class CreateDocxInput(Contract):
    title: str = Field(description="The title of the DOCX document")
    author: Optional[str] = Field(default=None, description="The author of the document")
    content: List[DocxContentItem] = Field(
        description="Array of content items to include in the document"
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Optional file path to save the DOCX. If not provided, returns base64",
    )


# ---------------------------------------------------------------------------
# create-pptx
# ---------------------------------------------------------------------------


class TextBoxElement(Contract):
    type: Literal["textBox"]
    text: str
    x: float = 0.5
    y: float = 0.5
    w: float = 9
    h: float = 1
    font_size: float = Field(default=18, gt=0)
    bold: bool = False
    color: HexColor = "000000"
    align: Literal["left", "center", "right"] = "left"


class ImageElement(Contract):
    type: Literal["image"]
    base64: str
    x: float = 1
    y: float = 1.5
    w: float = 8
    h: float = 4.5


class ShapeElement(Contract):
    type: Literal["shape"]
    shape_type: Literal["rect", "ellipse", "triangle", "line", "arrow"] = "rect"
    x: float = 1
    y: float = 1
    w: float = 2
    h: float = 2
    fill: HexColor = "0088CC"
    line: Optional[HexColor] = None


class TableElement(Contract):
    type: Literal["table"]
    headers: List[str] = Field(min_length=1)
    rows: List[List[str]]
    x: float = 0.5
    y: float = 1.5
    w: float = 9


class ChartSeries(Contract):
    name: str
    labels: List[str]
    values: List[float]


class ChartElement(Contract):
    type: Literal["chart"]
    chart_type: Literal["bar", "line", "pie", "doughnut"] = "bar"
    title: Optional[str] = None
    data: List[ChartSeries] = Field(min_length=1)
    x: float = 0.5
    y: float = 1.5
    w: float = 9
    h: float = 5


SlideElement = Annotated[
    Union[TextBoxElement, ImageElement, ShapeElement, TableElement, ChartElement],
    Field(discriminator="type"),
]


class SlideSpec(Contract):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    layout: Literal["title", "titleAndContent", "blank", "sectionHeader"] = "titleAndContent"
    elements: List[SlideElement] = Field(default_factory=list)
    background_color: Optional[HexColor] = None
    notes: Optional[str] = None


class CreatePptxInput(Contract):
    title: str = Field(description="The title of the presentation")
    author: Optional[str] = Field(default=None, description="The author of the presentation")
    subject: Optional[str] = Field(default=None, description="The subject of the presentation")
    slides: List[SlideSpec] = Field(
        description="Array of slides to include in the presentation"
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Optional file path to save the PPTX. If not provided, returns base64",
    )


# ---------------------------------------------------------------------------
# read-* tools
# ---------------------------------------------------------------------------


class ReadSourceInput(Contract):
    """Where to load a document from; at least one source is required."""

    file_path: Optional[str] = Field(default=None, description="Path to the file to read")
    base64_content: Optional[str] = Field(
        default=None,
        description="Base64-encoded file content (alternative to filePath)",
    )
    prompt: Optional[str] = Field(
        default=None,
        description="Optional prompt for AI analysis of the document (uses Gemini)",
    )

    @model_validator(mode="after")
    def _require_source(self) -> "ReadSourceInput":
        if not (self.file_path or self.base64_content):
            raise PydanticCustomError("missing_source", MISSING_SOURCE_MESSAGE)
        return self


class ReadPdfInput(ReadSourceInput):
    pass


class ReadDocxInput(ReadSourceInput):
    output_format: Literal["text", "html", "both"] = Field(
        default="both",
        description="Output format: text only, HTML, or both",
    )


class ReadPptxInput(ReadSourceInput):
    pass
