"""Aggregate captured TAP output and render the end-of-run summary."""

from __future__ import annotations

from pathlib import Path

import click

from cns_test_runner.test_driving.harness_driver import CAPTURE_SUFFIX, FAILING_LIST_FILENAME

from .report_models import RunAggregate, TapCounts
from .tap_summary import parse_tap_counts


def aggregate_results(output_dir: Path, elapsed_seconds: int) -> RunAggregate:
    """Sum assertion counts over every capture file and read the failing-files list."""
    counts = TapCounts()
    for capture_path in sorted(output_dir.glob(f"*{CAPTURE_SUFFIX}")):
        counts += parse_tap_counts(capture_path.read_text(encoding="utf-8", errors="replace"))
    return RunAggregate(
        total=counts.total,
        passed=counts.passed,
        failing_files=read_failing_files(output_dir / FAILING_LIST_FILENAME),
        elapsed_seconds=elapsed_seconds,
    )


def read_failing_files(failing_list_path: Path) -> tuple[Path, ...]:
    if not failing_list_path.exists():
        return ()
    lines = failing_list_path.read_text(encoding="utf-8").splitlines()
    return tuple(Path(line) for line in lines if line.strip())


def render_summary(aggregate: RunAggregate) -> list[str]:
    """Summary lines with ANSI styling; callers strip it for non-terminal output."""
    lines = [
        "",
        f"Completed in {aggregate.elapsed_seconds} seconds",
        click.style(f"PASS: {aggregate.passed} / {aggregate.total}", fg="green"),
    ]
    if aggregate.failed > 0:
        lines.append(click.style(f"FAIL: {aggregate.failed} / {aggregate.total}", fg="red"))
    if aggregate.failing_file_count > 0:
        lines.append("")
        lines.append(click.style("FAILING TESTS:", fg="red"))
        lines.extend(f"    {path}" for path in aggregate.failing_files)
    return lines
