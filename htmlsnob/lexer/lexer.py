"""Lexer."""

from __future__ import annotations

from collections.abc import Iterator
import re

from htmlsnob.lexer.dialects import Delimiter
from htmlsnob.lexer.options import LexerOptions
from htmlsnob.lexer.tokens import Attribute, Token, TokenFlags, TokenKind
from htmlsnob.text import LineIndex, TextRange, slice_text_range

_WHITESPACE = frozenset(" \t\n\r\f")
_NAME_STOP = frozenset(" \t\n\r\f><")
_ATTRIBUTE_NAME_STOP = frozenset(" \t\n\r\f=><")
_QUOTES = frozenset("\"'")


class Lexer:
    """Permissive markup lexer.

    Emits one token per call to `next_token` until the input is exhausted, then
    None. Token ranges are contiguous and cover the whole source. Malformed
    markup never raises: a tag that runs off the end of the input is emitted as
    TEXT for the remainder, and a directive opener with no closer is TEXT.
    """

    def __init__(self, source: str, options: LexerOptions | None = None) -> None:
        self._source = source
        self._options = options if options is not None else LexerOptions()
        self._position = 0
        self._line_index = LineIndex(source)
        self._raw_text_end: str | None = None
        self._delimiters = self._options.delimiters
        self._opener_chars = frozenset(delimiter.open[0] for delimiter in self._delimiters)

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def line_index(self) -> LineIndex:
        return self._line_index

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Token | None:
        if self.is_eof:
            return None

        start = self._position

        if self._raw_text_end is not None:
            end_tag = self._raw_text_end
            self._raw_text_end = None
            end = self._find_raw_text_end(start, end_tag)
            if end > start:
                return self._finish(TokenKind.TEXT, start, end)

        source = self._source
        ch = source[start]
        if ch == "<":
            delimiter = self._directive_at(start)
            if delimiter is not None:
                return self._lex_directive(start, delimiter)
            if source.startswith("<!--", start):
                return self._lex_comment(start)
            if source.startswith("<!", start):
                return self._lex_declaration(start)
            if source.startswith("</", start) and _is_name_start(self._peek_char(start + 2)):
                return self._lex_close_tag(start)
            if _is_name_start(self._peek_char(start + 1)):
                return self._lex_open_tag(start)
        elif ch in self._opener_chars:
            delimiter = self._directive_at(start)
            if delimiter is not None:
                return self._lex_directive(start, delimiter)

        return self._lex_text(start)

    def lex(self) -> list[Token]:
        return list(self)

    # -------------------------
    # Token kinds
    # -------------------------

    def _lex_text(self, start: int, scan_from: int | None = None) -> Token:
        source = self._source
        length = len(source)
        index = start + 1 if scan_from is None else scan_from
        while index < length:
            ch = source[index]
            if ch == "<":
                break
            if ch in self._opener_chars and self._directive_at(index) is not None:
                break
            index += 1
        return self._finish(TokenKind.TEXT, start, index)

    def _lex_comment(self, start: int) -> Token:
        end = self._source.find("-->", start + 4)
        if end < 0:
            return self._finish(TokenKind.COMMENT, start, len(self._source), flags=TokenFlags.MISSING_END_BRACKET)
        return self._finish(TokenKind.COMMENT, start, end + 3)

    def _lex_declaration(self, start: int) -> Token:
        end = self._source.find(">", start + 2)
        if end < 0:
            return self._finish(TokenKind.DOCTYPE, start, len(self._source), flags=TokenFlags.MISSING_END_BRACKET)
        return self._finish(TokenKind.DOCTYPE, start, end + 1)

    def _lex_directive(self, start: int, delimiter: Delimiter) -> Token:
        end, terminated = self._scan_directive(start, delimiter)
        if not terminated:
            # An opener with no closer is literal text, e.g. `{#fff` in CSS prose.
            return self._lex_text(start, end)
        return self._finish(TokenKind.TEMPLATE_DIRECTIVE, start, end)

    def _lex_open_tag(self, start: int) -> Token:
        source = self._source
        length = len(source)
        name_start = start + 1
        index = self._scan_name(name_start)
        name = source[name_start:index]
        attributes: list[Attribute] = []
        flags = TokenFlags.NONE

        while True:
            index = self._skip_whitespace(index)
            if index >= length:
                return self._malformed(start)
            ch = source[index]
            if ch == ">":
                index += 1
                break
            if source.startswith("/>", index):
                flags |= TokenFlags.SELF_CLOSING
                index += 2
                break
            if ch == "<" and self._directive_at(index) is None:
                flags |= TokenFlags.MISSING_END_BRACKET
                break
            attribute = self._scan_attribute(index)
            if attribute is None:
                return self._malformed(start)
            attributes.append(attribute)
            index = attribute.range.end.value

        if not flags & TokenFlags.SELF_CLOSING and name.lower() in self._options.raw_text_elements:
            self._raw_text_end = name
        return self._finish(TokenKind.OPEN_TAG, start, index, name=name, attributes=tuple(attributes), flags=flags)

    def _lex_close_tag(self, start: int) -> Token:
        source = self._source
        length = len(source)
        name_start = start + 2
        index = self._scan_name(name_start)
        name = source[name_start:index]
        flags = TokenFlags.NONE

        # Anything between the name and `>` is ignored.
        while True:
            if index >= length:
                return self._malformed(start)
            ch = source[index]
            if ch == ">":
                index += 1
                break
            if ch == "<" or ch in self._opener_chars:
                delimiter = self._directive_at(index)
                if delimiter is not None:
                    index, _ = self._scan_directive(index, delimiter)
                    continue
                if ch == "<":
                    flags |= TokenFlags.MISSING_END_BRACKET
                    break
            index += 1

        return self._finish(TokenKind.CLOSE_TAG, start, index, name=name, flags=flags)

    def _malformed(self, start: int) -> Token:
        # Unterminated markup: the rest of the input is plain text.
        self._raw_text_end = None
        return self._finish(TokenKind.TEXT, start, len(self._source))

    # -------------------------
    # Scanners (pure: return offsets, never move the cursor)
    # -------------------------

    def _scan_name(self, index: int) -> int:
        source = self._source
        length = len(source)
        while index < length:
            ch = source[index]
            if ch in _NAME_STOP or source.startswith("/>", index):
                break
            index += 1
        return index

    def _scan_attribute(self, start: int) -> Attribute | None:
        source = self._source
        length = len(source)

        delimiter = self._directive_at(start)
        if delimiter is not None:
            end, terminated = self._scan_directive(start, delimiter)
            return Attribute(
                name=source[start:end],
                value=None,
                range=TextRange._from_offsets(start, end),
                is_directive=terminated,
            )

        index = start
        while index < length:
            ch = source[index]
            if ch in _ATTRIBUTE_NAME_STOP or source.startswith("/>", index):
                break
            if ch in self._opener_chars and self._directive_at(index) is not None:
                break
            index += 1
        if index == start:
            # Stray character such as a leading `=`; swallow it as a nameless attribute.
            index += 1
        name = source[start:index]

        after_name = self._skip_whitespace(index)
        if after_name >= length or source[after_name] != "=":
            return Attribute(name=name, value=None, range=TextRange._from_offsets(start, index))

        value_start = self._skip_whitespace(after_name + 1)
        if value_start >= length:
            return None

        quote = source[value_start]
        if quote in _QUOTES:
            index = value_start + 1
            while index < length and source[index] != quote:
                if source[index] in self._opener_chars:
                    delimiter = self._directive_at(index)
                    if delimiter is not None:
                        index, _ = self._scan_directive(index, delimiter)
                        continue
                index += 1
            if index >= length:
                return None
            value = source[value_start + 1 : index]
            end = index + 1
        else:
            index = value_start
            while index < length:
                ch = source[index]
                if ch in _WHITESPACE or ch == ">" or source.startswith("/>", index):
                    break
                if ch == "<" or ch in self._opener_chars:
                    delimiter = self._directive_at(index)
                    if delimiter is not None:
                        index, _ = self._scan_directive(index, delimiter)
                        continue
                    if ch == "<":
                        break
                index += 1
            value = source[value_start:index]
            end = index

        return Attribute(name=name, value=value, range=TextRange._from_offsets(start, end))

    def _scan_directive(self, start: int, delimiter: Delimiter) -> tuple[int, bool]:
        """Return the end offset of the directive at `start` and whether it was closed.

        An unclosed directive ends right after its opener.
        """
        source = self._source
        length = len(source)
        index = start + len(delimiter.open)
        quote: str | None = None
        while index < length:
            ch = source[index]
            if quote is not None:
                if ch == "\\":
                    index += 2
                    continue
                if ch == quote:
                    quote = None
                index += 1
                continue
            if delimiter.quoting and ch in _QUOTES:
                quote = ch
                index += 1
                continue
            if source.startswith(delimiter.close, index):
                return index + len(delimiter.close), True
            index += 1
        return start + len(delimiter.open), False

    def _directive_at(self, index: int) -> Delimiter | None:
        if not self._delimiters:
            return None
        source = self._source
        # `\{{` is an escaped, literal opener.
        if index > 0 and source[index - 1] == "\\":
            return None
        for delimiter in self._delimiters:
            if source.startswith(delimiter.open, index):
                return delimiter
        return None

    def _find_raw_text_end(self, start: int, name: str) -> int:
        match = re.compile(r"</" + re.escape(name), re.IGNORECASE).search(self._source, start)
        return match.start() if match is not None else len(self._source)

    def _skip_whitespace(self, index: int) -> int:
        source = self._source
        length = len(source)
        while index < length and source[index] in _WHITESPACE:
            index += 1
        return index

    def _peek_char(self, index: int) -> str:
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _finish(
        self,
        kind: TokenKind,
        start: int,
        end: int,
        *,
        name: str | None = None,
        attributes: tuple[Attribute, ...] = (),
        flags: TokenFlags = TokenFlags.NONE,
    ) -> Token:
        self._position = end
        return Token(
            kind=kind,
            range=TextRange._from_offsets(start, end),
            position=self._line_index.position(start),
            name=name,
            attributes=attributes,
            flags=flags,
        )


def _is_name_start(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def tokenize(source: str, options: LexerOptions | None = None) -> Iterator[Token]:
    """Lazily lex `source`. The iterator is single-use."""
    return iter(Lexer(source, options))


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    return slice_text_range(source, token.range)
