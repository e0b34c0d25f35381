"""Lint session: files in, per-file diagnostics out."""

from htmlsnob.lint.results import FileLintResult, FileReadFailure, LintResult
from htmlsnob.lint.runner import lint, lint_files, lint_text

__all__ = [
    "FileLintResult",
    "FileReadFailure",
    "LintResult",
    "lint",
    "lint_files",
    "lint_text",
]
