"""Render lint results for terminals and editors."""

from __future__ import annotations

from typing import Final, Literal, TypeAlias

from htmlsnob.diagnostics import Diagnostic, Severity
from htmlsnob.lint import FileLintResult, LintResult
from htmlsnob.text import LineIndex, Position

EXIT_OK: Final[int] = 0
EXIT_ISSUES: Final[int] = 1
EXIT_TOOL_FAILURE: Final[int] = 2

MAX_MESSAGE_LENGTH: Final[int] = 80
SUCCESS_MESSAGE: Final[str] = "Success: No issues found\n"
DIAGNOSTIC_SOURCE: Final[str] = "htmlsnob"

PositionEncoding: TypeAlias = Literal["utf-16", "utf-32"]

LSP_SEVERITY: Final[dict[Severity, int]] = {
    "error": 1,
    "warning": 2,
    "info": 3,
}


def render_batch_report(result: LintResult) -> str:
    """Render the batch report.

    Each file with issues gets a `<path>:` header, then one source line and one
    underline line per diagnostic, then a blank line.
    """
    if result.success:
        return SUCCESS_MESSAGE

    parts: list[str] = []
    for file in result.files:
        if file.failure is not None:
            parts.append(f"{file.path}:\n  Failed to read file: {file.failure.reason}\n\n")
            continue
        if not file.diagnostics:
            continue
        line_index = LineIndex(file.source_text)
        parts.append(f"{file.path}:\n")
        for diagnostic in file.diagnostics:
            parts.append(_render_diagnostic(diagnostic, line_index))
        parts.append("\n")
    return "".join(parts)


def _render_diagnostic(diagnostic: Diagnostic, line_index: LineIndex) -> str:
    line_number = diagnostic.line
    line = line_index.line_text(line_number)
    indentation = " " * len(str(line_number))
    return f"{line_number}: {line}\n{indentation}  {_underline(diagnostic, line)} {_truncate(diagnostic.message)}\n"


def _underline(diagnostic: Diagnostic, line: str) -> str:
    start_column = diagnostic.column
    # Multi-line ranges are underlined to the end of their first line.
    end_column = diagnostic.end.column if diagnostic.end.line == diagnostic.start.line else len(line)
    end_column = max(end_column, start_column + 1)
    return ("-" * (end_column - start_column)).rjust(end_column)


def _truncate(message: str) -> str:
    if len(message) > MAX_MESSAGE_LENGTH:
        return message[:MAX_MESSAGE_LENGTH] + "..."
    return message


def document_diagnostics(
    file_result: FileLintResult,
    position_encoding: PositionEncoding = "utf-16",
) -> list[dict[str, object]]:
    """LSP `Diagnostic` objects for one document, in document order.

    `character` offsets are UTF-16 code units unless the client negotiated
    `utf-32`, in which case they are plain code point columns.
    """
    line_index = LineIndex(file_result.source_text)

    def character(position: Position) -> int:
        if position_encoding == "utf-32":
            return position.column
        return line_index.utf16_column(position)

    return [
        {
            "range": {
                "start": {"line": d.start.line, "character": character(d.start)},
                "end": {"line": d.end.line, "character": character(d.end)},
            },
            "severity": LSP_SEVERITY[d.severity],
            "code": d.code,
            "source": DIAGNOSTIC_SOURCE,
            "message": d.message,
        }
        for d in file_result.diagnostics
    ]


def exit_code_for(result: LintResult) -> int:
    if result.files and len(result.failures) == result.file_count:
        return EXIT_TOOL_FAILURE
    if result.success:
        return EXIT_OK
    return EXIT_ISSUES
