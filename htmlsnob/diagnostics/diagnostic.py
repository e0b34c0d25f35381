"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

from htmlsnob.text import Position, TextRange

Severity = Literal["error", "warning", "info"]

SEVERITIES: tuple[Severity, ...] = ("error", "warning", "info")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One structural issue, anchored to a range of the file that produced it."""

    path: str
    code: str
    message: str
    range: TextRange
    start: Position
    end: Position
    severity: Severity = "error"

    @property
    def line(self) -> int:
        return self.start.line

    @property
    def column(self) -> int:
        return self.start.column
