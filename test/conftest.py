"""Pytest configuration and fixtures

Provides shared fixtures for all tests: an isolated output directory, an
environment without AI credentials, the production tool registry and small
sample documents built with the project's own builders.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from documents_mcp.config import Config
from documents_mcp.contracts.inputs import CreateDocxInput, CreatePdfInput, CreatePptxInput
from documents_mcp.tools import build_registry
from documents_mcp.tools.create_docx import build_docx
from documents_mcp.tools.create_pdf import build_pdf
from documents_mcp.tools.create_pptx import build_pptx

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

INITIALIZE_REQUEST = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "initialize",
    "params": {
        "protocolVersion": "2024-11-05",
        "capabilities": {},
        "clientInfo": {"name": "documents-mcp-tests", "version": "0.0.1"},
    },
}

INITIALIZED_NOTIFICATION = {"jsonrpc": "2.0", "method": "notifications/initialized"}


# ============================================================================
# ENVIRONMENT ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def output_dir(tmp_path):
    """Route relative outputPath values into a per-test directory."""
    directory = tmp_path / "output"
    directory.mkdir()
    Config.set_test_mode(directory)
    yield directory
    Config.clear_test_mode()


@pytest.fixture(autouse=True)
def no_ai_credentials(monkeypatch):
    """AI analysis is unavailable unless a test opts in."""
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)


# ============================================================================
# REGISTRY
# ============================================================================


@pytest.fixture
def registry():
    return build_registry()


# ============================================================================
# SAMPLE DOCUMENTS
# ============================================================================


@pytest.fixture
def png_base64():
    return PNG_BASE64


@pytest.fixture
def sample_pdf() -> bytes:
    document = CreatePdfInput.model_validate(
        {
            "title": "Quarterly Report",
            "author": "Ada Lovelace",
            "content": [
                {"type": "heading", "content": "Summary", "level": 2},
                {"type": "text", "content": "Revenue grew steadily"},
            ],
        }
    )
    data, _ = build_pdf(document)
    return data


@pytest.fixture
def sample_docx() -> bytes:
    document = CreateDocxInput.model_validate(
        {
            "title": "Meeting Notes",
            "content": [
                {"type": "heading", "content": "Agenda", "level": 1},
                {"type": "paragraph", "content": "Budget review for next year"},
                {"type": "bulletList", "items": ["Hiring", "Travel"]},
            ],
        }
    )
    return build_docx(document)


@pytest.fixture
def sample_pptx() -> bytes:
    deck = CreatePptxInput.model_validate(
        {
            "title": "Roadmap",
            "slides": [
                {"title": "Welcome", "layout": "title", "subtitle": "Planning day"},
                {
                    "title": "Milestones",
                    "elements": [
                        {"type": "textBox", "text": "Launch beta", "y": 1.5},
                        {"type": "table", "headers": ["Phase", "Owner"], "rows": [["Alpha", "Grace"]]},
                    ],
                },
            ],
        }
    )
    return build_pptx(deck)


# ============================================================================
# PROTOCOL MESSAGES
# ============================================================================


@pytest.fixture
def initialize_request():
    return dict(INITIALIZE_REQUEST)


@pytest.fixture
def initialized_notification():
    return dict(INITIALIZED_NOTIFICATION)


# ============================================================================
# HTTP EVENT STREAMS
# ============================================================================


@pytest.fixture
def reset_sse_exit_event():
    """sse-starlette keeps a process-wide exit event bound to the first event loop."""
    from sse_starlette.sse import AppStatus

    AppStatus.should_exit_event = None
    yield
    AppStatus.should_exit_event = None
