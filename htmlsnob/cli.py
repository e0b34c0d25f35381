"""Command-line entry point: `htmlsnob [PATHS ...]`."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence
from fnmatch import fnmatch
import glob
import logging
from pathlib import Path
import sys

from htmlsnob import __version__
from htmlsnob.config import ConfigError, load_ruleset
from htmlsnob.lint import lint_files
from htmlsnob.log import LogConfig, configure_logging
from htmlsnob.report import EXIT_TOOL_FAILURE, exit_code_for, render_batch_report

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "**/*.html"
_GLOB_CHARS = frozenset("*?[")


def expand_paths(patterns: Iterable[str]) -> list[str]:
    """Expand glob patterns recursively; pass literal paths through unchanged.

    Directories matched by a glob are dropped. Order follows the arguments, then
    sorted matches, without duplicates.
    """
    paths: dict[str, None] = {}
    for pattern in patterns:
        if not _GLOB_CHARS.intersection(pattern):
            paths.setdefault(pattern, None)
            continue
        for match in sorted(glob.glob(pattern, recursive=True)):
            if Path(match).is_file():
                paths.setdefault(match, None)
    return list(paths)


def filter_ignored(paths: Iterable[str], ignore_patterns: Sequence[str]) -> list[str]:
    return [path for path in paths if not any(fnmatch(path, pattern) for pattern in ignore_patterns)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htmlsnob",
        description="Check HTML and HTML template files for unbalanced tags.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=[DEFAULT_PATTERN],
        help=f"Files or glob patterns to lint (default: {DEFAULT_PATTERN})",
    )
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to a .toml or .yaml config file")
    parser.add_argument(
        "-i",
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Skip files matching this glob (repeatable)",
    )
    parser.add_argument("-j", "--jobs", type=int, default=None, help="Number of worker threads")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(LogConfig(log_level=logging.DEBUG if args.verbose else logging.WARNING))

    if args.jobs is not None and args.jobs < 1:
        print("error: --jobs must be at least 1", file=sys.stderr)
        return EXIT_TOOL_FAILURE

    try:
        ruleset = load_ruleset(args.config, search_dir=Path.cwd())
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_TOOL_FAILURE

    paths = expand_paths(args.paths)
    if not paths:
        print(f"No files found matching the patterns: {', '.join(args.paths)}", file=sys.stderr)
        return EXIT_TOOL_FAILURE

    paths = filter_ignored(paths, args.ignore)
    if not paths:
        print("All matching files were ignored", file=sys.stderr)
        return EXIT_TOOL_FAILURE

    logger.debug("Linting %d file(s)", len(paths))
    result = lint_files(paths, ruleset, max_workers=args.jobs)
    sys.stdout.write(render_batch_report(result))
    return exit_code_for(result)


if __name__ == "__main__":
    raise SystemExit(main())
