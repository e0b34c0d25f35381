"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from htmlsnob.text import Position, TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Markup
    # -------------------------
    OPEN_TAG = 1  # <name ...> and <name .../>
    CLOSE_TAG = 2  # </name>

    # -------------------------
    # Content
    # -------------------------
    TEXT = 10
    COMMENT = 11  # <!-- ... -->
    DOCTYPE = 12  # <!DOCTYPE ...> and other <!...> declarations

    # -------------------------
    # Foreign syntax, passed through opaquely
    # -------------------------
    TEMPLATE_DIRECTIVE = 20


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    SELF_CLOSING = 1 << 0  # <br/>
    MISSING_END_BRACKET = 1 << 1


@dataclass(frozen=True, slots=True)
class Attribute:
    """One attribute of an open tag.

    `value` is None for boolean attributes. When a template directive sits where
    an attribute name would be, `is_directive` is set and `name` is its raw text.
    """

    name: str
    value: str | None
    range: TextRange
    is_directive: bool = False


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token."""

    kind: TokenKind
    range: TextRange
    position: Position
    name: str | None = None
    attributes: tuple[Attribute, ...] = ()
    flags: TokenFlags = TokenFlags.NONE

    @property
    def is_self_closing(self) -> bool:
        return bool(self.flags & TokenFlags.SELF_CLOSING)

    @property
    def is_missing_end_bracket(self) -> bool:
        return bool(self.flags & TokenFlags.MISSING_END_BRACKET)
