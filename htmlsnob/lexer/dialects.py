"""Template dialects and the directive delimiters the lexer passes through opaquely."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePath
from typing import Final


class Dialect(StrEnum):
    """Template languages embedded in HTML-like markup."""

    BLADE = "blade"
    EEX = "eex"
    EJS = "ejs"
    ERB = "erb"
    GO = "go"
    HANDLEBARS = "handlebars"
    JINJA2 = "jinja2"
    LIQUID = "liquid"
    MUSTACHE = "mustache"
    PHP = "php"
    TWIG = "twig"


@dataclass(frozen=True, slots=True)
class Delimiter:
    """Open/close pair of a directive span.

    With `quoting`, a closer inside a single- or double-quoted string does not end
    the directive (`{{ "}}" }}` is one span).
    """

    open: str
    close: str
    quoting: bool = False

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise ValueError("Delimiter open/close must be non-empty")


_MUSTACHE_FAMILY: Final[tuple[Delimiter, ...]] = (
    Delimiter("{{{", "}}}", quoting=True),
    Delimiter("{{!--", "--}}"),
    Delimiter("{{!", "}}"),
    Delimiter("{{", "}}", quoting=True),
)

_JINJA_FAMILY: Final[tuple[Delimiter, ...]] = (
    Delimiter("{{", "}}", quoting=True),
    Delimiter("{%", "%}", quoting=True),
    Delimiter("{#", "#}"),
)

# `<%` also covers `<%=`, `<%-`, `<%_`, `<%#` and `<%==`; `-%>`/`_%>` end with `%>`.
_PERCENT_FAMILY: Final[tuple[Delimiter, ...]] = (Delimiter("<%", "%>"),)

DIALECT_DELIMITERS: Final[dict[Dialect, tuple[Delimiter, ...]]] = {
    Dialect.BLADE: (
        Delimiter("{{--", "--}}"),
        Delimiter("{!!", "!!}"),
        Delimiter("{{", "}}"),
    ),
    Dialect.EEX: _PERCENT_FAMILY,
    Dialect.EJS: _PERCENT_FAMILY,
    Dialect.ERB: _PERCENT_FAMILY,
    Dialect.GO: (
        Delimiter("{{/*", "*/}}"),
        Delimiter("{{", "}}"),
    ),
    Dialect.HANDLEBARS: _MUSTACHE_FAMILY,
    Dialect.JINJA2: _JINJA_FAMILY,
    Dialect.LIQUID: (
        Delimiter("{{", "}}", quoting=True),
        Delimiter("{%", "%}", quoting=True),
    ),
    Dialect.MUSTACHE: (
        Delimiter("{{{", "}}}", quoting=True),
        Delimiter("{{!", "}}"),
        Delimiter("{{", "}}", quoting=True),
    ),
    Dialect.PHP: (
        Delimiter("<?php", "?>", quoting=True),
        Delimiter("<?=", "?>", quoting=True),
    ),
    Dialect.TWIG: _JINJA_FAMILY,
}

# Longest suffix wins, so `.blade.php` beats `.php`.
DIALECT_EXTENSIONS: Final[dict[str, Dialect]] = {
    ".blade.php": Dialect.BLADE,
    ".eex": Dialect.EEX,
    ".heex": Dialect.EEX,
    ".leex": Dialect.EEX,
    ".ejs": Dialect.EJS,
    ".erb": Dialect.ERB,
    ".gohtml": Dialect.GO,
    ".tmpl": Dialect.GO,
    ".hbs": Dialect.HANDLEBARS,
    ".handlebars": Dialect.HANDLEBARS,
    ".jinja": Dialect.JINJA2,
    ".jinja2": Dialect.JINJA2,
    ".j2": Dialect.JINJA2,
    ".liquid": Dialect.LIQUID,
    ".mustache": Dialect.MUSTACHE,
    ".php": Dialect.PHP,
    ".twig": Dialect.TWIG,
}


def dialect_for_path(path: str | PurePath | None) -> Dialect | None:
    if path is None:
        return None
    name = PurePath(path).name.lower()
    for suffix in sorted(DIALECT_EXTENSIONS, key=len, reverse=True):
        if name.endswith(suffix):
            return DIALECT_EXTENSIONS[suffix]
    return None


def delimiters_for(dialects: Iterable[Dialect], extra: Iterable[Delimiter] = ()) -> tuple[Delimiter, ...]:
    """Merge delimiter tables, dropping duplicate openers, longest opener first.

    The first table to claim an opener keeps it, so `quoting` follows the
    earliest dialect listed.
    """
    merged: dict[str, Delimiter] = {}
    for delimiter in extra:
        merged.setdefault(delimiter.open, delimiter)
    for dialect in dialects:
        for delimiter in DIALECT_DELIMITERS[dialect]:
            merged.setdefault(delimiter.open, delimiter)
    return tuple(sorted(merged.values(), key=lambda delimiter: len(delimiter.open), reverse=True))


ALL_DELIMITERS: Final[tuple[Delimiter, ...]] = delimiters_for(Dialect)
