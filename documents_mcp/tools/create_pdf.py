"""create-pdf: render content items to HTML and convert with WeasyPrint."""

from __future__ import annotations

import binascii
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from weasyprint import HTML

from documents_mcp.contracts.inputs import CreatePdfInput, PdfImageItem
from documents_mcp.contracts.results import CreatePdfResult, ToolFailure
from documents_mcp.logger import session_logger
from documents_mcp.tools.common import decode_base64, deliver, encode_base64

NAME = "create-pdf"
DESCRIPTION = "Create a PDF document with text, headings, tables, and images"

TEMPLATE_NAME = "pdf_document.html.jinja2"

# CSS @page size keywords
PAGE_SIZES = {"A4": "A4", "Letter": "letter", "Legal": "legal"}

_IMAGE_SIGNATURES = {
    "png": (b"\x89PNG\r\n\x1a\n", "image/png"),
    "jpg": (b"\xff\xd8\xff", "image/jpeg"),
    "jpeg": (b"\xff\xd8\xff", "image/jpeg"),
}

_environment = Environment(
    loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
    autoescape=select_autoescape(["html", "jinja2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _image_view(item: PdfImageItem) -> Dict[str, Any]:
    """Template view of an image; ``src`` is None when it cannot be embedded."""
    view: Dict[str, Any] = {"type": "image", "src": None, "style": None}
    signature, mime_type = _IMAGE_SIGNATURES[item.format]
    try:
        data = decode_base64(item.base64)
    except (binascii.Error, ValueError):
        return view
    if not data.startswith(signature):
        return view

    view["src"] = f"data:{mime_type};base64,{encode_base64(data)}"
    style = []
    if item.width:
        style.append(f"width: {item.width}pt")
    if item.height:
        style.append(f"height: {item.height}pt")
    view["style"] = "; ".join(style) or None
    return view


def render_html(document: CreatePdfInput) -> str:
    items: List[Any] = [
        _image_view(item) if isinstance(item, PdfImageItem) else item
        for item in document.content
    ]
    template = _environment.get_template(TEMPLATE_NAME)
    return template.render(
        title=document.title,
        author=document.author,
        page_size=PAGE_SIZES[document.page_size],
        items=items,
    )


def build_pdf(document: CreatePdfInput) -> Tuple[bytes, int]:
    """Return ``(pdf_bytes, page_count)`` for ``document``."""
    rendered = HTML(string=render_html(document)).render()
    return rendered.write_pdf(), len(rendered.pages)


async def create_pdf(document: CreatePdfInput) -> Union[CreatePdfResult, ToolFailure]:
    pdf_bytes, page_count = build_pdf(document)
    session_logger.info(
        "PDF rendered",
        title=document.title,
        page_count=page_count,
        size_bytes=len(pdf_bytes),
    )

    delivered = deliver(pdf_bytes, document.output_path, "PDF")
    if isinstance(delivered, ToolFailure):
        return delivered
    return CreatePdfResult(page_count=page_count, **delivered)
