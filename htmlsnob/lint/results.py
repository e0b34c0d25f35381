"""Lint result carriers."""

from __future__ import annotations

from dataclasses import dataclass, field

from htmlsnob.diagnostics import Diagnostic, collect_diagnostics, has_errors


@dataclass(frozen=True, slots=True)
class FileReadFailure:
    """A file that could not be read; counts as an issue for that file."""

    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class FileLintResult:
    """Result of linting one file (or one in-memory document)."""

    path: str
    source_text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    failure: FileReadFailure | None = None

    @property
    def issue_count(self) -> int:
        return len(self.diagnostics) + (1 if self.failure is not None else 0)

    @property
    def success(self) -> bool:
        return self.issue_count == 0

    @property
    def has_errors(self) -> bool:
        return self.failure is not None or has_errors(self.diagnostics)


@dataclass(frozen=True, slots=True)
class LintResult:
    """Result of one batch run, files in input order."""

    files: list[FileLintResult] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return collect_diagnostics(*(file.diagnostics for file in self.files))

    @property
    def failures(self) -> list[FileReadFailure]:
        return [file.failure for file in self.files if file.failure is not None]

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def issue_count(self) -> int:
        return sum(file.issue_count for file in self.files)

    @property
    def success(self) -> bool:
        return self.issue_count == 0
