"""Tool input contracts and result variants."""

from documents_mcp.contracts.base import (
    Contract,
    ContractViolation,
    FieldError,
    describe,
    validate,
)
from documents_mcp.contracts.inputs import (
    MISSING_SOURCE_MESSAGE,
    CreateDocxInput,
    CreatePdfInput,
    CreatePptxInput,
    ReadDocxInput,
    ReadPdfInput,
    ReadPptxInput,
    ReadSourceInput,
)
from documents_mcp.contracts.results import (
    AiAnalysis,
    CreateDocxResult,
    CreatePdfResult,
    CreatePptxResult,
    ReadDocxResult,
    ReadPdfResult,
    ReadPptxResult,
    ResultModel,
    ToolFailure,
)

__all__ = [
    "Contract",
    "ContractViolation",
    "FieldError",
    "describe",
    "validate",
    "MISSING_SOURCE_MESSAGE",
    "CreatePdfInput",
    "CreateDocxInput",
    "CreatePptxInput",
    "ReadSourceInput",
    "ReadPdfInput",
    "ReadDocxInput",
    "ReadPptxInput",
    "ResultModel",
    "ToolFailure",
    "AiAnalysis",
    "CreatePdfResult",
    "CreateDocxResult",
    "CreatePptxResult",
    "ReadPdfResult",
    "ReadDocxResult",
    "ReadPptxResult",
]
