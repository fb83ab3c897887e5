"""create-pptx: build a PowerPoint presentation with python-pptx.

Geometry is in inches on a 10 x 5.625 (16:9) slide.
"""

from __future__ import annotations

import io
from typing import Optional, Union

from pptx import Presentation
from pptx.chart.data import CategoryChartData
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE, XL_LEGEND_POSITION
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE
from pptx.enum.text import PP_ALIGN
from pptx.util import Inches, Pt

from documents_mcp.contracts.inputs import (
    ChartElement,
    CreatePptxInput,
    ImageElement,
    ShapeElement,
    SlideSpec,
    TableElement,
    TextBoxElement,
)
from documents_mcp.contracts.results import CreatePptxResult, ToolFailure
from documents_mcp.logger import session_logger
from documents_mcp.tools.common import decode_base64, deliver

NAME = "create-pptx"
DESCRIPTION = (
    "Create a PPTX (PowerPoint) presentation with slides, text, images, shapes, tables, and charts"
)

SLIDE_WIDTH = 10
SLIDE_HEIGHT = 5.625
BLANK_LAYOUT = 6
TITLE_COLOR = "363636"
SUBTITLE_COLOR = "666666"
PLACEHOLDER_COLOR = "999999"
TABLE_HEADER_FILL = "E0E0E0"
TABLE_ROW_HEIGHT = 0.4

ALIGNMENTS = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
}

SHAPES = {
    "rect": MSO_SHAPE.RECTANGLE,
    "ellipse": MSO_SHAPE.OVAL,
    "triangle": MSO_SHAPE.ISOSCELES_TRIANGLE,
    "arrow": MSO_SHAPE.RIGHT_ARROW,
}

CHART_TYPES = {
    "bar": XL_CHART_TYPE.COLUMN_CLUSTERED,
    "line": XL_CHART_TYPE.LINE,
    "pie": XL_CHART_TYPE.PIE,
    "doughnut": XL_CHART_TYPE.DOUGHNUT,
}


def _rgb(color: str) -> RGBColor:
    return RGBColor.from_string(color.lstrip("#").upper())


def _add_text(
    slide,
    text: str,
    x: float,
    y: float,
    w: float,
    h: float,
    font_size: float,
    bold: bool = False,
    color: str = "000000",
    align: str = "left",
) -> None:
    box = slide.shapes.add_textbox(Inches(x), Inches(y), Inches(w), Inches(h))
    frame = box.text_frame
    frame.word_wrap = True
    paragraph = frame.paragraphs[0]
    paragraph.alignment = ALIGNMENTS[align]
    run = paragraph.add_run()
    run.text = text
    run.font.size = Pt(font_size)
    run.font.bold = bold
    run.font.color.rgb = _rgb(color)


def _add_title(slide, title: Optional[str], subtitle: Optional[str]) -> None:
    if title:
        _add_text(slide, title, 0.5, 2.5, 9, 1.5, 44, bold=True, color=TITLE_COLOR, align="center")
    if subtitle:
        _add_text(slide, subtitle, 0.5, 4, 9, 1, 24, color=SUBTITLE_COLOR, align="center")


def _add_image(slide, element: ImageElement) -> None:
    try:
        data = decode_base64(element.base64)
        slide.shapes.add_picture(
            io.BytesIO(data),
            Inches(element.x),
            Inches(element.y),
            Inches(element.w),
            Inches(element.h),
        )
    except Exception as exc:
        # Undecodable or unsupported image data
        session_logger.warning(
            "Image could not be added to slide",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        _add_text(
            slide,
            "[Image could not be added]",
            element.x,
            element.y,
            element.w,
            0.5,
            12,
            color=PLACEHOLDER_COLOR,
        )


def _add_shape(slide, element: ShapeElement) -> None:
    left, top = Inches(element.x), Inches(element.y)
    width, height = Inches(element.w), Inches(element.h)

    if element.shape_type == "line":
        connector = slide.shapes.add_connector(
            MSO_CONNECTOR.STRAIGHT, left, top, left + width, top + height
        )
        connector.line.color.rgb = _rgb(element.line or element.fill)
        return

    shape = slide.shapes.add_shape(SHAPES[element.shape_type], left, top, width, height)
    shape.fill.solid()
    shape.fill.fore_color.rgb = _rgb(element.fill)
    if element.line:
        shape.line.color.rgb = _rgb(element.line)


def _add_table(slide, element: TableElement) -> None:
    columns = len(element.headers)
    rows = len(element.rows) + 1
    graphic = slide.shapes.add_table(
        rows,
        columns,
        Inches(element.x),
        Inches(element.y),
        Inches(element.w),
        Inches(TABLE_ROW_HEIGHT * rows),
    )
    table = graphic.table
    for column in table.columns:
        column.width = Inches(element.w / columns)

    for index, header in enumerate(element.headers):
        cell = table.cell(0, index)
        cell.text = header
        for run in cell.text_frame.paragraphs[0].runs:
            run.font.bold = True
        cell.fill.solid()
        cell.fill.fore_color.rgb = _rgb(TABLE_HEADER_FILL)

    for row_index, row in enumerate(element.rows, start=1):
        for column_index, value in enumerate(row[:columns]):
            table.cell(row_index, column_index).text = value


def _add_chart(slide, element: ChartElement) -> None:
    chart_data = CategoryChartData()
    chart_data.categories = element.data[0].labels
    for series in element.data:
        chart_data.add_series(series.name, series.values)

    graphic = slide.shapes.add_chart(
        CHART_TYPES[element.chart_type],
        Inches(element.x),
        Inches(element.y),
        Inches(element.w),
        Inches(element.h),
        chart_data,
    )
    chart = graphic.chart
    chart.has_legend = True
    chart.legend.position = XL_LEGEND_POSITION.BOTTOM
    chart.legend.include_in_layout = False
    if element.title:
        chart.has_title = True
        chart.chart_title.text_frame.text = element.title


def _add_slide(presentation, spec: SlideSpec) -> None:
    slide = presentation.slides.add_slide(presentation.slide_layouts[BLANK_LAYOUT])

    if spec.background_color:
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = _rgb(spec.background_color)

    if spec.notes:
        slide.notes_slide.notes_text_frame.text = spec.notes

    if spec.layout in ("title", "sectionHeader"):
        _add_title(slide, spec.title, spec.subtitle)
    elif spec.layout == "titleAndContent" and spec.title:
        _add_text(slide, spec.title, 0.5, 0.3, 9, 1, 32, bold=True, color=TITLE_COLOR)

    for element in spec.elements:
        if isinstance(element, TextBoxElement):
            _add_text(
                slide,
                element.text,
                element.x,
                element.y,
                element.w,
                element.h,
                element.font_size,
                bold=element.bold,
                color=element.color,
                align=element.align,
            )
        elif isinstance(element, ImageElement):
            _add_image(slide, element)
        elif isinstance(element, ShapeElement):
            _add_shape(slide, element)
        elif isinstance(element, TableElement):
            _add_table(slide, element)
        elif isinstance(element, ChartElement):
            _add_chart(slide, element)


def build_pptx(deck: CreatePptxInput) -> bytes:
    presentation = Presentation()
    presentation.slide_width = Inches(SLIDE_WIDTH)
    presentation.slide_height = Inches(SLIDE_HEIGHT)

    properties = presentation.core_properties
    properties.title = deck.title
    if deck.author:
        properties.author = deck.author
    if deck.subject:
        properties.subject = deck.subject

    for spec in deck.slides:
        _add_slide(presentation, spec)

    if not deck.slides:
        slide = presentation.slides.add_slide(presentation.slide_layouts[BLANK_LAYOUT])
        _add_title(slide, deck.title, f"By {deck.author}" if deck.author else None)

    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


async def create_pptx(deck: CreatePptxInput) -> Union[CreatePptxResult, ToolFailure]:
    data = build_pptx(deck)
    slide_count = len(deck.slides) or 1
    session_logger.info(
        "PPTX built",
        title=deck.title,
        slide_count=slide_count,
        size_bytes=len(data),
    )

    delivered = deliver(data, deck.output_path, "PPTX")
    if isinstance(delivered, ToolFailure):
        return delivered
    return CreatePptxResult(slide_count=slide_count, **delivered)
