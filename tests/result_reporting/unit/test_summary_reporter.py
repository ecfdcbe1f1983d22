"""Tests for result aggregation and the end-of-run summary."""

from __future__ import annotations

from pathlib import Path

import click
from cns_test_runner.result_reporting import RunAggregate, aggregate_results, render_summary


def test_aggregate_results_sums_every_capture_and_reads_failing_list(tmp_path: Path) -> None:
    (tmp_path / "a.test.js.tap").write_text("# tests 3\n# pass 3\n", encoding="utf-8")
    (tmp_path / "b.test.js.tap").write_text("ok 1\nnot ok 2\n1..2\n", encoding="utf-8")
    (tmp_path / "failing-tests.txt").write_text("/repo/test/b.test.js\n", encoding="utf-8")

    aggregate = aggregate_results(tmp_path, elapsed_seconds=7)

    assert aggregate.total == 5
    assert aggregate.passed == 4
    assert aggregate.failed == 1
    assert aggregate.failing_files == (Path("/repo/test/b.test.js"),)
    assert aggregate.elapsed_seconds == 7


def test_aggregate_results_of_empty_directory_is_zero(tmp_path: Path) -> None:
    aggregate = aggregate_results(tmp_path, elapsed_seconds=0)

    assert (aggregate.total, aggregate.passed, aggregate.failed) == (0, 0, 0)
    assert aggregate.failing_file_count == 0


def test_render_summary_for_passing_run_has_no_failure_lines() -> None:
    lines = render_summary(RunAggregate(total=6, passed=6, failing_files=(), elapsed_seconds=12))
    plain = [click.unstyle(line) for line in lines]

    assert "Completed in 12 seconds" in plain
    assert "PASS: 6 / 6" in plain
    assert not any(line.startswith("FAIL") for line in plain)
    assert lines[plain.index("PASS: 6 / 6")] == click.style("PASS: 6 / 6", fg="green")


def test_render_summary_lists_failures_in_red() -> None:
    aggregate = RunAggregate(
        total=5,
        passed=4,
        failing_files=(Path("/repo/test/b.test.js"),),
        elapsed_seconds=3,
    )

    lines = render_summary(aggregate)
    plain = [click.unstyle(line) for line in lines]

    assert lines[plain.index("FAIL: 1 / 5")] == click.style("FAIL: 1 / 5", fg="red")
    heading = plain.index("FAILING TESTS:")
    assert lines[heading] == click.style("FAILING TESTS:", fg="red")
    assert plain[heading + 1] == "    /repo/test/b.test.js"


def test_failed_count_never_goes_negative() -> None:
    assert RunAggregate(total=1, passed=3, failing_files=(), elapsed_seconds=0).failed == 0
