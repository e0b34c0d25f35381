#!/usr/bin/env python
import argparse
from pathlib import Path

from htmlsnob.config import load_ruleset
from htmlsnob.lexer import Lexer, LexerOptions, Token, token_text


def format_attributes(token: Token) -> str:
    if not token.attributes:
        return "[]"
    parts: list[str] = []
    for attribute in token.attributes:
        kind = "directive" if attribute.is_directive else "attr"
        parts.append(
            f"({kind}, {attribute.name!r}, value={attribute.value!r}, "
            f"span=({attribute.range.start.value},{attribute.range.end.value}))"
        )
    return "[" + ", ".join(parts) + "]"


def format_token(idx: int, token: Token, source: str) -> str:
    base = (
        f"[{idx}] {token.kind.name} "
        f"text={token_text(source, token)!r} "
        f"span=({token.range.start.value},{token.range.end.value}) "
        f"at={token.position.line}:{token.position.column}"
    )

    if token.name is not None:
        base += f" name={token.name!r} attributes={format_attributes(token)}"
    if token.flags:
        base += f" flags={token.flags!r}"
    return base


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump the token stream of one HTML or template file")
    parser.add_argument("input", type=Path)
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write tokens here instead of stdout")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Config file for delimiters/raw-text elements")
    args = parser.parse_args()

    text = args.input.read_text(encoding="utf-8")
    options = LexerOptions.from_ruleset(load_ruleset(args.config), args.input)
    tokens = Lexer(text, options).lex()
    lines = [format_token(idx, token, text) for idx, token in enumerate(tokens)]

    if args.output is None:
        print("\n".join(lines))
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

    print(f"Wrote {len(tokens)} tokens to {args.output}")


if __name__ == "__main__":
    main()
