"""Lexer."""

from htmlsnob.lexer.dialects import (
    ALL_DELIMITERS,
    DIALECT_DELIMITERS,
    DIALECT_EXTENSIONS,
    Delimiter,
    Dialect,
    delimiters_for,
    dialect_for_path,
)
from htmlsnob.lexer.lexer import Lexer, token_text, tokenize
from htmlsnob.lexer.options import DEFAULT_RAW_TEXT_ELEMENTS, LexerOptions
from htmlsnob.lexer.tokens import Attribute, Token, TokenFlags, TokenKind

__all__ = [
    "ALL_DELIMITERS",
    "DEFAULT_RAW_TEXT_ELEMENTS",
    "DIALECT_DELIMITERS",
    "DIALECT_EXTENSIONS",
    "Attribute",
    "Delimiter",
    "Dialect",
    "Lexer",
    "LexerOptions",
    "Token",
    "TokenFlags",
    "TokenKind",
    "delimiters_for",
    "dialect_for_path",
    "token_text",
    "tokenize",
]
