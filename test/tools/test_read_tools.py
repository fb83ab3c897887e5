"""Tests for the read-pdf, read-docx and read-pptx tools."""

import base64

import pytest

from documents_mcp.contracts import AiAnalysis, ReadDocxInput, ReadPdfInput, ReadPptxInput, ToolFailure
from documents_mcp.ai import analysis
from documents_mcp.ai.analysis import MISSING_API_KEY_MESSAGE
from documents_mcp.mcp_server.responses import envelope_payload
from documents_mcp.tools.read_docx import read_docx
from documents_mcp.tools.read_pdf import read_pdf
from documents_mcp.tools.read_pptx import read_pptx


def encoded(data: bytes) -> str:
    return base64.b64encode(data).decode()


@pytest.fixture
def recorded_analysis(monkeypatch):
    """Replace the Gemini call with a recorder that returns a canned answer."""
    calls = []

    async def fake_analyze(content, mime_type, prompt=None, logger=None):
        calls.append({"content": content, "mime_type": mime_type, "prompt": prompt})
        return AiAnalysis(success=True, text="A short summary")

    monkeypatch.setattr(analysis, "analyze_document", fake_analyze)
    return calls


# ============================================================================
# Source loading
# ============================================================================


class TestSourceLoading:
    async def test_missing_file(self, tmp_path):
        result = await read_pdf(ReadPdfInput(file_path=str(tmp_path / "absent.pdf")))

        assert isinstance(result, ToolFailure)
        assert result.error.startswith("Failed to read file: ")

    async def test_undecodable_base64(self):
        result = await read_docx(ReadDocxInput(base64_content="***not base64***"))

        assert isinstance(result, ToolFailure)
        assert result.error.startswith("Failed to decode base64 content: ")

    async def test_relative_path_resolves_against_cwd(self, tmp_path, monkeypatch, sample_pdf):
        (tmp_path / "report.pdf").write_bytes(sample_pdf)
        monkeypatch.chdir(tmp_path)

        result = await read_pdf(ReadPdfInput(file_path="report.pdf"))

        assert result.success is True

    async def test_file_path_takes_precedence(self, tmp_path, sample_pdf):
        path = tmp_path / "report.pdf"
        path.write_bytes(sample_pdf)

        result = await read_pdf(ReadPdfInput(file_path=str(path), base64_content=encoded(b"junk")))

        assert result.success is True


# ============================================================================
# read-pdf
# ============================================================================


class TestReadPdf:
    async def test_metadata_and_text(self, sample_pdf):
        result = await read_pdf(ReadPdfInput(base64_content=encoded(sample_pdf)))

        assert result.success is True
        assert result.metadata.page_count == 1
        assert result.metadata.file_size_bytes == len(sample_pdf)
        assert result.metadata.pdf_version[0].isdigit()
        assert result.metadata.title == "Quarterly Report"
        assert result.metadata.author == "Ada Lovelace"
        assert "Revenue" in result.text
        assert result.note
        assert result.ai_analysis is None

    async def test_missing_header(self):
        result = await read_pdf(ReadPdfInput(base64_content=encoded(b"hello world")))

        assert isinstance(result, ToolFailure)
        assert result.error == "Invalid PDF file: Missing %PDF header"

    async def test_corrupt_body(self):
        result = await read_pdf(ReadPdfInput(base64_content=encoded(b"%PDF-1.7\ngarbage")))

        assert isinstance(result, ToolFailure)
        assert result.error.startswith("Failed to parse PDF: ")

    async def test_prompt_without_api_key(self, sample_pdf):
        result = await read_pdf(
            ReadPdfInput(base64_content=encoded(sample_pdf), prompt="Summarise")
        )

        assert result.success is True
        assert result.ai_analysis.success is False
        assert result.ai_analysis.error == MISSING_API_KEY_MESSAGE

    async def test_prompt_sends_pdf_bytes(self, sample_pdf, recorded_analysis):
        result = await read_pdf(
            ReadPdfInput(base64_content=encoded(sample_pdf), prompt="Summarise")
        )

        assert result.ai_analysis.text == "A short summary"
        assert recorded_analysis == [
            {"content": sample_pdf, "mime_type": "application/pdf", "prompt": "Summarise"}
        ]


# ============================================================================
# read-docx
# ============================================================================


class TestReadDocx:
    async def test_both_formats(self, sample_docx):
        result = await read_docx(ReadDocxInput(base64_content=encoded(sample_docx)))

        assert "Budget review" in result.text
        assert result.character_count == len(result.text)
        assert result.word_count == len(result.text.split())
        assert "<h1>Agenda</h1>" in result.html
        assert isinstance(result.messages, list)

    async def test_text_only(self, sample_docx):
        result = await read_docx(
            ReadDocxInput(base64_content=encoded(sample_docx), output_format="text")
        )

        payload = result.to_payload()
        assert "text" in payload
        assert "html" not in payload
        assert "messages" not in payload

    async def test_html_only(self, sample_docx):
        result = await read_docx(
            ReadDocxInput(base64_content=encoded(sample_docx), output_format="html")
        )

        payload = result.to_payload()
        assert "html" in payload
        assert "text" not in payload
        assert "wordCount" not in payload

    async def test_html_only_still_analyses_text(self, sample_docx, recorded_analysis):
        result = await read_docx(
            ReadDocxInput(base64_content=encoded(sample_docx), output_format="html", prompt="Topics?")
        )

        assert result.text is None
        assert result.ai_analysis.success is True
        assert recorded_analysis[0]["mime_type"] == "text/plain"
        assert "Budget review" in recorded_analysis[0]["content"]

    async def test_missing_pk_signature(self):
        result = await read_docx(ReadDocxInput(base64_content=encoded(b"%PDF-1.4")))

        assert isinstance(result, ToolFailure)
        assert result.error == "Invalid DOCX file: Missing PK signature"

    async def test_corrupt_archive(self):
        result = await read_docx(ReadDocxInput(base64_content=encoded(b"PK\x03\x04broken")))

        assert isinstance(result, ToolFailure)
        assert result.error.startswith("Failed to parse DOCX: ")


# ============================================================================
# read-pptx
# ============================================================================


class TestReadPptx:
    async def test_per_slide_text(self, sample_pptx):
        result = await read_pptx(ReadPptxInput(base64_content=encoded(sample_pptx)))

        assert result.slide_count == 2
        assert [slide.slide for slide in result.slides] == [1, 2]
        assert "Welcome" in result.slides[0].text
        assert "Planning day" in result.slides[0].text
        assert "Launch beta" in result.slides[1].text
        assert "Grace" in result.slides[1].text
        assert result.text.startswith("Slide 1:\n")
        assert "\n\nSlide 2:\n" in result.text
        assert not result.text.endswith("\n")

    async def test_prompt_analyses_joined_text(self, sample_pptx, recorded_analysis):
        result = await read_pptx(
            ReadPptxInput(base64_content=encoded(sample_pptx), prompt="Summarise")
        )

        assert result.ai_analysis.text == "A short summary"
        assert recorded_analysis[0]["content"].startswith("Slide 1:\n")

    async def test_missing_pk_signature(self):
        result = await read_pptx(ReadPptxInput(base64_content=encoded(b"GIF89a")))

        assert isinstance(result, ToolFailure)
        assert result.error == "Invalid PPTX file: Missing PK signature"

    async def test_corrupt_archive(self):
        result = await read_pptx(ReadPptxInput(base64_content=encoded(b"PK\x03\x04broken")))

        assert isinstance(result, ToolFailure)
        assert result.error.startswith("Failed to parse PPTX: ")


class TestReadThroughRegistry:
    async def test_failure_envelope(self, registry):
        response = await registry.dispatch("read-pdf", {"base64Content": encoded(b"nope")})

        assert response.isError is True
        assert envelope_payload(response) == {
            "success": False,
            "error": "Invalid PDF file: Missing %PDF header",
        }

    async def test_success_envelope_uses_wire_names(self, registry, sample_pptx):
        response = await registry.dispatch("read-pptx", {"base64Content": encoded(sample_pptx)})

        payload = envelope_payload(response)
        assert payload["success"] is True
        assert payload["slideCount"] == 2
        assert "aiAnalysis" not in payload
