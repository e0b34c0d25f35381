"""Tag-balance state machine over a token stream."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from htmlsnob.config import RuleSet
from htmlsnob.diagnostics import (
    MISMATCHED_NESTING,
    MISSING_CLOSE_TAG,
    MISSING_END_BRACKET,
    UNEXPECTED_CLOSE_TAG,
    Diagnostic,
    DiagnosticSpec,
    sort_diagnostics,
)
from htmlsnob.lexer import Attribute, Token, TokenKind
from htmlsnob.text import LineIndex, Position, TextRange

IGNORE_BELOW_MARKER = "htmlsnob ignore below"
IGNORE_ABOVE_MARKER = "htmlsnob ignore above"


@dataclass(frozen=True, slots=True)
class OpenTagRecord:
    """An open tag still waiting for its close tag."""

    name: str
    position: Position
    range: TextRange
    attributes: tuple[Attribute, ...] = ()

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.lower()


class TagBalanceMatcher:
    """Consumes one file's tokens and reports unbalanced tags.

    On a close tag that matches a record deeper in the stack, every record above
    it is popped and reported as `mismatched_nesting`. Records still open at the
    end are reported as `missing_close_tag`, anchored at their own open tag.
    `mismatched_nesting` is therefore the cascade half of a missing close tag:
    silencing every unclosed tag takes disabling both rules.
    Disabled rules only suppress output; the stack is maintained the same way.
    """

    def __init__(self, ruleset: RuleSet, line_index: LineIndex, path: str) -> None:
        self._ruleset = ruleset
        self._line_index = line_index
        self._path = path
        self._stack: list[OpenTagRecord] = []
        self._diagnostics: list[Diagnostic] = []
        self._ignored_from: int | None = None
        self._ignored: list[TextRange] = []
        self._finished = False

    @property
    def stack(self) -> tuple[OpenTagRecord, ...]:
        return tuple(self._stack)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    def feed(self, token: Token) -> None:
        if self._finished:
            raise RuntimeError("TagBalanceMatcher.feed() called after finish()")

        match token.kind:
            case TokenKind.OPEN_TAG:
                self._open_tag(token)
            case TokenKind.CLOSE_TAG:
                self._close_tag(token)
            case TokenKind.COMMENT:
                self._comment(token)
            case TokenKind.DOCTYPE:
                self._check_end_bracket(token, "Doctype")
            case _:
                # Text and template directives never produce diagnostics.
                pass

    def finish(self) -> list[Diagnostic]:
        if not self._finished:
            self._finished = True
            for record in self._stack:
                self._report_record(MISSING_CLOSE_TAG, record)
            self._stack.clear()
            if self._ignored_from is not None:
                self._ignored.append(TextRange._from_offsets(self._ignored_from, len(self._line_index.source)))
                self._ignored_from = None
        return sort_diagnostics(d for d in self._diagnostics if not self._is_ignored(d))

    def _open_tag(self, token: Token) -> None:
        name = token.name or ""
        self._check_end_bracket(token, f"Open tag `{name}`", name)
        if token.is_self_closing or self._ruleset.is_void(name):
            return
        self._stack.append(
            OpenTagRecord(
                name=name,
                position=token.position,
                range=token.range,
                attributes=token.attributes,
            )
        )

    def _close_tag(self, token: Token) -> None:
        name = token.name or ""
        self._check_end_bracket(token, f"Close tag `{name}`", name)

        for depth in range(len(self._stack) - 1, -1, -1):
            if self._stack[depth].matches(name):
                break
        else:
            self._report(UNEXPECTED_CLOSE_TAG, token.range, name)
            return

        while len(self._stack) - 1 > depth:
            self._report_record(MISMATCHED_NESTING, self._stack.pop())
        self._stack.pop()

    def _comment(self, token: Token) -> None:
        self._check_end_bracket(token, "Comment")
        text = self._line_index.source[token.range.start.value : token.range.end.value]
        if IGNORE_BELOW_MARKER in text and self._ignored_from is None:
            self._ignored_from = token.range.end.value
        elif IGNORE_ABOVE_MARKER in text and self._ignored_from is not None:
            self._ignored.append(TextRange._from_offsets(self._ignored_from, token.range.start.value))
            self._ignored_from = None

    def _check_end_bracket(self, token: Token, subject: str, tag_name: str | None = None) -> None:
        if token.is_missing_end_bracket:
            self._report(MISSING_END_BRACKET, token.range, subject, tag_name=tag_name)

    def _report_record(self, spec: DiagnosticSpec, record: OpenTagRecord) -> None:
        self._report(spec, record.range, record.name)

    def _report(self, spec: DiagnosticSpec, range: TextRange, name: str, *, tag_name: str | None = None) -> None:
        setting = self._ruleset.setting(spec.code)
        if not setting.applies_to(tag_name if tag_name is not None else name):
            return
        self._diagnostics.append(
            Diagnostic(
                path=self._path,
                code=spec.code,
                message=spec.format(setting.message, name=name),
                range=range,
                start=self._line_index.position(range.start),
                end=self._line_index.position(range.end),
                severity=setting.severity,
            )
        )

    def _is_ignored(self, diagnostic: Diagnostic) -> bool:
        offset = diagnostic.range.start
        return any(region.contains(offset) for region in self._ignored)


def match_tokens(
    tokens: Iterable[Token], ruleset: RuleSet, source: str | LineIndex, path: str = "<memory>"
) -> list[Diagnostic]:
    """Run a fresh matcher over a whole token stream."""
    line_index = source if isinstance(source, LineIndex) else LineIndex(source)
    matcher = TagBalanceMatcher(ruleset, line_index, path)
    for token in tokens:
        matcher.feed(token)
    return matcher.finish()
