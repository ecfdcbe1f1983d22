"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass

from cns_test_runner.configuration.runtime_settings import RunConfiguration
from cns_test_runner.environment_probe.endpoint_models import EndpointSet
from cns_test_runner.result_reporting.report_models import RunAggregate
from cns_test_runner.test_driving.driver_outcomes import TestFileResult

MAX_EXIT_STATUS = 255


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    config_path: str | None = None
    name_filter: str | None = None
    stop_on_first: bool = False


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    configuration: RunConfiguration
    endpoints: EndpointSet
    results: tuple[TestFileResult, ...]
    aggregate: RunAggregate

    @property
    def exit_code(self) -> int:
        return min(self.aggregate.failing_file_count, MAX_EXIT_STATUS)
