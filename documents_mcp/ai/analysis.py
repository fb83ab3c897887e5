"""Document analysis through the Gemini API.

Analysis is optional: without ``GOOGLE_API_KEY`` every call returns a
failed ``AiAnalysis`` instead of raising, so read tools still succeed.
"""

from __future__ import annotations

from typing import Optional, Union

from google import genai
from google.genai import types

from documents_mcp.config import Config
from documents_mcp.contracts.results import AiAnalysis
from documents_mcp.logger import Logger, session_logger

DEFAULT_ANALYSIS_PROMPT = "Analyze this document and provide a summary of its contents."
MISSING_API_KEY_MESSAGE = (
    "GOOGLE_API_KEY environment variable is not set. AI analysis is unavailable."
)


def _build_contents(content: Union[bytes, str], mime_type: str, prompt: str) -> list:
    if isinstance(content, bytes):
        return [prompt, types.Part.from_bytes(data=content, mime_type=mime_type)]
    return [f"{prompt}\n\nDocument content:\n{content}"]


async def analyze_document(
    content: Union[bytes, str],
    mime_type: str,
    prompt: Optional[str] = None,
    logger: Logger = session_logger,
) -> AiAnalysis:
    """
    Ask Gemini to analyse a document.

    Args:
        content: Raw document bytes (sent inline) or already extracted text
        mime_type: MIME type of ``content`` when it is bytes
        prompt: Instruction for the model; a summary request if None

    Returns:
        AiAnalysis with ``text`` on success or ``error`` on failure
    """
    api_key = Config.get_google_api_key()
    if not api_key:
        logger.warning("AI analysis requested without GOOGLE_API_KEY")
        return AiAnalysis(success=False, error=MISSING_API_KEY_MESSAGE)

    model = Config.get_gemini_model()
    try:
        client = genai.Client(api_key=api_key)
        response = await client.aio.models.generate_content(
            model=model,
            contents=_build_contents(content, mime_type, prompt or DEFAULT_ANALYSIS_PROMPT),
        )
    except Exception as exc:
        logger.error(
            "AI analysis failed",
            model=model,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return AiAnalysis(success=False, error=f"AI analysis failed: {exc}")

    logger.info("AI analysis completed", model=model, mime_type=mime_type)
    return AiAnalysis(success=True, text=response.text or "")
