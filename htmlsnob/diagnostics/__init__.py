"""Diagnostics."""

from htmlsnob.diagnostics.codes import (
    MISMATCHED_NESTING,
    MISSING_CLOSE_TAG,
    MISSING_END_BRACKET,
    RULE_SPECS,
    UNEXPECTED_CLOSE_TAG,
    DiagnosticSpec,
)
from htmlsnob.diagnostics.diagnostic import SEVERITIES, Diagnostic, Severity
from htmlsnob.diagnostics.report import collect_diagnostics, has_errors, sort_diagnostics

__all__ = [
    "MISMATCHED_NESTING",
    "MISSING_CLOSE_TAG",
    "MISSING_END_BRACKET",
    "RULE_SPECS",
    "SEVERITIES",
    "UNEXPECTED_CLOSE_TAG",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "has_errors",
    "sort_diagnostics",
]
