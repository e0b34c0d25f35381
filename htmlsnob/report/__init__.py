"""Report rendering and exit codes."""

from htmlsnob.report.formatter import (
    DIAGNOSTIC_SOURCE,
    EXIT_ISSUES,
    EXIT_OK,
    EXIT_TOOL_FAILURE,
    LSP_SEVERITY,
    MAX_MESSAGE_LENGTH,
    SUCCESS_MESSAGE,
    PositionEncoding,
    document_diagnostics,
    exit_code_for,
    render_batch_report,
)

__all__ = [
    "DIAGNOSTIC_SOURCE",
    "EXIT_ISSUES",
    "EXIT_OK",
    "EXIT_TOOL_FAILURE",
    "LSP_SEVERITY",
    "MAX_MESSAGE_LENGTH",
    "SUCCESS_MESSAGE",
    "PositionEncoding",
    "document_diagnostics",
    "exit_code_for",
    "render_batch_report",
]
