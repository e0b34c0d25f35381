"""Lexer configuration options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Final

from htmlsnob.lexer.dialects import ALL_DELIMITERS, Delimiter

if TYPE_CHECKING:
    from htmlsnob.config import RuleSet

DEFAULT_RAW_TEXT_ELEMENTS: Final[frozenset[str]] = frozenset({"script", "style", "textarea"})


@dataclass(frozen=True, slots=True)
class LexerOptions:
    """Directive delimiters in effect and elements whose content is opaque text.

    An empty `delimiters` tuple turns template tolerance off: `{{`, `<%` and
    friends are then lexed as ordinary text and markup.
    """

    delimiters: tuple[Delimiter, ...] = ALL_DELIMITERS
    raw_text_elements: frozenset[str] = DEFAULT_RAW_TEXT_ELEMENTS

    @staticmethod
    def from_ruleset(ruleset: RuleSet, path: str | PurePath | None = None) -> LexerOptions:
        return LexerOptions(
            delimiters=ruleset.delimiters_for(path),
            raw_text_elements=ruleset.raw_text_elements,
        )
