#!/usr/bin/env python3
"""Quick perf benchmark for linting a tree of templates."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from htmlsnob.config import RuleSet, load_ruleset
from htmlsnob.lexer import DIALECT_EXTENSIONS
from htmlsnob.lint import lint_text

LINTED_SUFFIXES = frozenset({".html", ".htm", *DIALECT_EXTENSIONS})


def _collect_files(root: Path) -> list[Path]:
    files = sorted(path for path in root.rglob("*") if path.suffix.lower() in LINTED_SUFFIXES)
    return [path for path in files if path.is_file()]


def _run_once(
    sources: list[tuple[Path, str]],
    ruleset: RuleSet,
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int]:
    start = time.perf_counter()
    total_chars = 0
    total_diagnostics = 0
    iterator = tqdm(sources, desc=label, unit="file") if show_progress else sources
    for path, text in iterator:
        result = lint_text(text, ruleset, str(path))
        total_chars += len(text)
        total_diagnostics += len(result.diagnostics)
    duration = time.perf_counter() - start
    return duration, total_chars, total_diagnostics


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark lint throughput")
    parser.add_argument("root", type=Path, help="Directory of HTML/template files")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Config file to lint with")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument("--profile-top", type=int, default=30, help="Number of cProfile rows to print (default: 30)")
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    args = parser.parse_args()

    root: Path = args.root
    if not root.is_dir():
        raise SystemExit(f"Invalid root: {root}")

    files = _collect_files(root)
    if not files:
        raise SystemExit(f"No HTML or template files found under {root}")

    ruleset = load_ruleset(args.config)
    # Reading is excluded from the timings.
    sources = [(path, path.read_text(encoding="utf-8", errors="replace")) for path in files]
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(sources, ruleset, label=f"warmup {warmup_idx + 1}", show_progress=show_progress)

        timings: list[float] = []
        chars = 0
        diagnostics = 0
        for run_idx in range(max(args.runs, 1)):
            duration, chars, diagnostics = _run_once(
                sources,
                ruleset,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, chars, diagnostics

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, chars, diagnostics = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, chars, diagnostics = _benchmark()

    mean = statistics.mean(timings)
    print(f"Dataset: {root}")
    print(f"Files: {len(files)}")
    print(f"Characters: {chars}")
    print(f"Diagnostics: {diagnostics}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Files/s (mean): {len(files) / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
