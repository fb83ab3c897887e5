"""Centralized configuration documentation and defaults for documents-mcp.

This module provides a comprehensive overview of all configuration options
and their environment variable mappings.
"""

# =============================================================================
# ENVIRONMENT VARIABLES REFERENCE
# =============================================================================

# Output
# ------
# OUTPUT_DIR: Directory that relative outputPath values are written under
#   (default: current working directory)
#
# Network transport
# -----------------
# PORT: HTTP/SSE server port (default: 3000)
#
# AI analysis
# -----------
# GOOGLE_API_KEY: Enables the optional AI analysis on read tools. When unset,
#   read tools still succeed and report aiAnalysis.success = false.
# GEMINI_MODEL: Model used for analysis (default: gemini-2.5-flash)
#
# Development & Testing
# ---------------------
# DOCUMENTS_MCP_LOG_LEVEL: Logging verbosity (default: INFO)
#   Values: DEBUG, INFO, WARNING, ERROR, CRITICAL

# =============================================================================
# CONFIGURATION DEFAULTS
# =============================================================================

SERVER_NAME = "documents-mcp"
SERVER_VERSION = "1.1.0"
SERVER_DESCRIPTION = "MCP server for creating and reading PDF, DOCX, and PPTX documents"

DEFAULT_HTTP_PORT = 3000
DEFAULT_HTTP_HOST = "0.0.0.0"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# =============================================================================
# CONFIGURATION HELPER FUNCTIONS
# =============================================================================


def get_config_summary() -> dict:
    """Get a summary of current configuration from environment.

    Returns:
        Dictionary with current configuration values
    """
    from documents_mcp.config import Config

    return {
        "output_dir": str(Config.get_output_dir()),
        "test_mode": Config.is_test_mode(),
        "http_port": Config.get_http_port(),
        "google_api_key_set": Config.get_google_api_key() is not None,
        "gemini_model": Config.get_gemini_model(),
        "log_level": Config.get_log_level(),
    }
