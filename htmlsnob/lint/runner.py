"""Lint runner: tokenize, match, collect."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
import logging
from pathlib import Path

from htmlsnob.config import RuleSet
from htmlsnob.lexer import Lexer, LexerOptions
from htmlsnob.lint.results import FileLintResult, FileReadFailure, LintResult
from htmlsnob.matcher import TagBalanceMatcher

logger = logging.getLogger(__name__)


def lint_text(text: str, ruleset: RuleSet, path: str = "<memory>") -> FileLintResult:
    """Lint one in-memory document.

    The lexer's delimiters follow the RuleSet, with the dialect guessed from
    `path` when the RuleSet names none.
    """
    lexer = Lexer(text, LexerOptions.from_ruleset(ruleset, path))
    matcher = TagBalanceMatcher(ruleset, lexer.line_index, path)
    for token in lexer:
        matcher.feed(token)
    return FileLintResult(path=path, source_text=text, diagnostics=matcher.finish())


def lint(path: str | Path, text: str, ruleset: RuleSet) -> LintResult:
    """Lint one already-read document as a batch of one."""
    return LintResult(files=[lint_text(text, ruleset, str(path))])


def lint_files(
    paths: Iterable[str | Path],
    ruleset: RuleSet,
    *,
    max_workers: int | None = None,
) -> LintResult:
    """Read and lint every path, one worker thread per file.

    A file that cannot be read is recorded on its own result and never stops the
    rest of the batch.
    """
    resolved = [str(path) for path in paths]
    if not resolved:
        return LintResult(files=[])

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        files = list(executor.map(lambda path: _lint_path(path, ruleset), resolved))
    return LintResult(files=files)


def _lint_path(path: str, ruleset: RuleSet) -> FileLintResult:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        logger.debug("Failed to read %s: %s", path, reason)
        return FileLintResult(path=path, source_text="", failure=FileReadFailure(path=path, reason=reason))

    logger.debug("Linting %s", path)
    return lint_text(text, ruleset, path)
