"""documents-mcp: MCP server for creating and reading PDF, DOCX and PPTX files."""

from documents_mcp.config_docs import SERVER_NAME, SERVER_VERSION

__version__ = SERVER_VERSION

__all__ = ["SERVER_NAME", "SERVER_VERSION", "__version__"]
