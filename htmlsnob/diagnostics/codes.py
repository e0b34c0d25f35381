"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final

from htmlsnob.diagnostics.diagnostic import Severity


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    severity: Severity = "error"

    def format(self, template: str | None = None, **fields: str) -> str:
        """Render `template` (or the built-in message) with `{name}`-style fields."""
        rendered = self.message if template is None else template
        for key, value in fields.items():
            rendered = rendered.replace(f"{{{key}}}", value)
        return rendered


MISSING_CLOSE_TAG: Final[DiagnosticSpec] = DiagnosticSpec(
    code="missing_close_tag",
    message="Open tag `{name}` is missing close tag",
    severity="error",
)

UNEXPECTED_CLOSE_TAG: Final[DiagnosticSpec] = DiagnosticSpec(
    code="unexpected_close_tag",
    message="Close tag `{name}` is missing open tag",
    severity="error",
)

# Reported for open tags skipped over when a close tag matches a record deeper in the stack.
MISMATCHED_NESTING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="mismatched_nesting",
    message="Open tag `{name}` is missing close tag",
    severity="error",
)

MISSING_END_BRACKET: Final[DiagnosticSpec] = DiagnosticSpec(
    code="missing_end_bracket",
    message="{name} is missing end bracket",
    severity="warning",
)

RULE_SPECS: Final[tuple[DiagnosticSpec, ...]] = (
    MISSING_CLOSE_TAG,
    UNEXPECTED_CLOSE_TAG,
    MISMATCHED_NESTING,
    MISSING_END_BRACKET,
)
