"""Tests for run execution domain entities."""

from __future__ import annotations

from pathlib import Path

from cns_test_runner.configuration.runtime_settings import RunConfiguration
from cns_test_runner.environment_probe import EndpointSet
from cns_test_runner.result_reporting import RunAggregate
from cns_test_runner.run_execution.run_contracts import RunOutcome, RunRequest


def _outcome(failing_count: int) -> RunOutcome:
    return RunOutcome(
        configuration=RunConfiguration.__new__(RunConfiguration),
        endpoints=EndpointSet(zone_name="global", addresses={}),
        results=(),
        aggregate=RunAggregate(
            total=0,
            passed=0,
            failing_files=tuple(Path(f"/t/{index}.test.js") for index in range(failing_count)),
            elapsed_seconds=0,
        ),
    )


def test_run_request_defaults_to_unfiltered_full_run() -> None:
    request = RunRequest()

    assert request.config_path is None
    assert request.name_filter is None
    assert request.stop_on_first is False


def test_exit_code_equals_number_of_failing_files() -> None:
    assert _outcome(0).exit_code == 0
    assert _outcome(3).exit_code == 3


def test_exit_code_is_clamped_to_a_single_byte() -> None:
    assert _outcome(300).exit_code == 255
