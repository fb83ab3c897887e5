"""create-docx: build a Word document with python-docx."""

from __future__ import annotations

import io
from typing import Union

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Pt

from documents_mcp.contracts.inputs import (
    BulletListItem,
    CreateDocxInput,
    DocxImageItem,
    DocxTextItem,
    HeadingItem,
    NumberedListItem,
    PageBreakItem,
    ParagraphItem,
    TableItem,
)
from documents_mcp.contracts.results import CreateDocxResult, ToolFailure
from documents_mcp.logger import session_logger
from documents_mcp.tools.common import decode_base64, deliver

NAME = "create-docx"
DESCRIPTION = "Create a DOCX (Word) document with text, headings, lists, tables, and images"

DEFAULT_CREATOR = "Documents MCP"
HEADER_FILL = "E0E0E0"
# Image sizes are given in pixels at 96 dpi
EMU_PER_PIXEL = 9525

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justified": WD_ALIGN_PARAGRAPH.JUSTIFY,
}


def _shade(cell, fill: str) -> None:
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)


def _add_text(document, item: DocxTextItem) -> None:
    run = document.add_paragraph().add_run(item.content)
    run.bold = item.bold
    run.italic = item.italic
    run.underline = item.underline
    run.font.size = Pt(item.font_size / 2)


def _add_heading(document, item: HeadingItem) -> None:
    heading = document.add_heading(item.content, level=item.level)
    heading.paragraph_format.space_before = Pt(12)
    heading.paragraph_format.space_after = Pt(6)


def _add_paragraph(document, item: ParagraphItem) -> None:
    paragraph = document.add_paragraph(item.content)
    paragraph.alignment = ALIGNMENTS[item.alignment]
    paragraph.paragraph_format.space_after = Pt(10)


def _add_list(document, items, style: str) -> None:
    for text in items:
        document.add_paragraph(text, style=style)


def _add_table(document, item: TableItem) -> None:
    columns = max([len(item.headers)] + [len(row) for row in item.rows] + [1])
    table = document.add_table(rows=1, cols=columns)
    table.style = "Table Grid"

    for cell, header in zip(table.rows[0].cells, item.headers):
        cell.text = ""
        cell.paragraphs[0].add_run(header).bold = True
    for cell in table.rows[0].cells:
        _shade(cell, HEADER_FILL)

    for row in item.rows:
        for cell, value in zip(table.add_row().cells, row):
            cell.text = value

    document.add_paragraph()


def _add_image(document, item: DocxImageItem) -> None:
    paragraph = document.add_paragraph()
    try:
        data = decode_base64(item.base64)
        shape = paragraph.add_run().add_picture(
            io.BytesIO(data),
            width=Emu(int(item.width * EMU_PER_PIXEL)),
            height=Emu(int(item.height * EMU_PER_PIXEL)),
        )
    except Exception as exc:
        # Undecodable or unsupported image data
        session_logger.warning(
            "Image could not be embedded in DOCX",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        paragraph.add_run("[Image could not be embedded]").italic = True
        return

    doc_properties = shape._inline.docPr
    doc_properties.set("descr", item.alt_text)
    doc_properties.set("title", item.alt_text)
    paragraph.paragraph_format.space_after = Pt(10)


def build_docx(document_input: CreateDocxInput) -> bytes:
    document = Document()

    properties = document.core_properties
    properties.title = document_input.title
    properties.author = document_input.author or DEFAULT_CREATOR
    properties.comments = "Document created by Documents MCP"

    title = document.add_heading(document_input.title, level=0)
    title.paragraph_format.space_after = Pt(20)

    for item in document_input.content:
        if isinstance(item, DocxTextItem):
            _add_text(document, item)
        elif isinstance(item, HeadingItem):
            _add_heading(document, item)
        elif isinstance(item, ParagraphItem):
            _add_paragraph(document, item)
        elif isinstance(item, BulletListItem):
            _add_list(document, item.items, "List Bullet")
        elif isinstance(item, NumberedListItem):
            _add_list(document, item.items, "List Number")
        elif isinstance(item, TableItem):
            _add_table(document, item)
        elif isinstance(item, DocxImageItem):
            _add_image(document, item)
        elif isinstance(item, PageBreakItem):
            document.add_page_break()

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


async def create_docx(document: CreateDocxInput) -> Union[CreateDocxResult, ToolFailure]:
    data = build_docx(document)
    session_logger.info(
        "DOCX built",
        title=document.title,
        items=len(document.content),
        size_bytes=len(data),
    )

    delivered = deliver(data, document.output_path, "DOCX")
    if isinstance(delivered, ToolFailure):
        return delivered
    return CreateDocxResult(**delivered)
