"""Resolved, immutable lint configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePath
from types import MappingProxyType
from typing import Final

from htmlsnob.diagnostics import RULE_SPECS, Severity
from htmlsnob.lexer import DEFAULT_RAW_TEXT_ELEMENTS, Delimiter, Dialect, delimiters_for, dialect_for_path

DEFAULT_VOID_ELEMENTS: Final[frozenset[str]] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(frozen=True, slots=True)
class RuleSetting:
    """Per-rule switch, severity and message override.

    `message` is a template with a `{name}` placeholder; None keeps the built-in
    wording. Tag names in `except_tags` are compared lower-cased.
    """

    enabled: bool = True
    severity: Severity = "error"
    message: str | None = None
    except_tags: frozenset[str] = frozenset()

    def applies_to(self, tag_name: str | None) -> bool:
        if not self.enabled:
            return False
        return tag_name is None or tag_name.lower() not in self.except_tags


_DISABLED: Final[RuleSetting] = RuleSetting(enabled=False)


def _default_rules() -> Mapping[str, RuleSetting]:
    return MappingProxyType({spec.code: RuleSetting(severity=spec.severity) for spec in RULE_SPECS})


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Everything one lint pass reads. Never mutated; replace it to reconfigure."""

    rules: Mapping[str, RuleSetting] = field(default_factory=_default_rules)
    void_elements: frozenset[str] = DEFAULT_VOID_ELEMENTS
    raw_text_elements: frozenset[str] = DEFAULT_RAW_TEXT_ELEMENTS
    template_tolerance: bool = True
    dialects: tuple[Dialect, ...] = ()
    extra_delimiters: tuple[Delimiter, ...] = ()

    def setting(self, code: str) -> RuleSetting:
        return self.rules.get(code, _DISABLED)

    def is_enabled(self, code: str) -> bool:
        return self.setting(code).enabled

    def is_void(self, tag_name: str) -> bool:
        return tag_name.lower() in self.void_elements

    def delimiters_for(self, path: str | PurePath | None = None) -> tuple[Delimiter, ...]:
        """Directive delimiters for one file.

        Explicit `dialects` win; otherwise the dialect is guessed from the file
        name. A file name with no dialect is plain HTML and only gets
        `extra_delimiters`. With no file name at all every built-in dialect is
        active.
        """
        if not self.template_tolerance:
            return ()
        if self.dialects:
            dialects: tuple[Dialect, ...] = self.dialects
        elif path is None:
            dialects = tuple(Dialect)
        else:
            detected = dialect_for_path(path)
            dialects = (detected,) if detected is not None else ()
        return delimiters_for(dialects, self.extra_delimiters)


def default_ruleset() -> RuleSet:
    return RuleSet()
