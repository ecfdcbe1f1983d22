"""Run execution use-case service."""

from __future__ import annotations

import logging
import os
import platform
import time
from collections.abc import Callable, Mapping
from typing import BinaryIO

from cns_test_runner.configuration import (
    ConfigurationError,
    RunConfiguration,
    load_runner_settings,
)
from cns_test_runner.environment_probe import (
    EndpointResolver,
    EndpointSet,
    EnvironmentProbeError,
    probe_endpoints,
    read_zone_name,
    select_endpoint_resolver,
)
from cns_test_runner.guard_check import ensure_test_host
from cns_test_runner.platform_commands import CommandRunner
from cns_test_runner.result_reporting import aggregate_results
from cns_test_runner.test_discovery import TestDiscoveryError, discover_test_files
from cns_test_runner.test_driving import (
    HarnessDriver,
    TestDrivingError,
    build_child_environment,
    ensure_harness_available,
    prepare_output_directory,
)

from .run_contracts import RunOutcome, RunRequest

_LOGGER = logging.getLogger(__name__)

EndpointResolverFactory = Callable[[str, str], EndpointResolver]


class RunExecutionError(Exception):
    """Raised when the environment does not allow the run to start."""


def execute_integration_run(
    request: RunRequest,
    *,
    run_command: CommandRunner | None = None,
    endpoint_resolver_factory: EndpointResolverFactory | None = None,
    system_name: Callable[[], str] = platform.system,
    base_environment: Mapping[str, str] | None = None,
    stdout: BinaryIO | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> RunOutcome:
    """Guard the host, resolve endpoints, run every selected test file and aggregate results.

    Raises:
      GuardRefusedError: If the host has not opted in to destructive tests.
      RunExecutionError: If configuration, endpoints, harness or output directory are unusable.
    """
    started = clock()
    configuration = _load_run_configuration(request)
    ensure_test_host(configuration.settings.guard, system_name=system_name)

    endpoints = _resolve_endpoints(configuration, run_command, endpoint_resolver_factory)
    paths = configuration.settings.paths
    try:
        ensure_harness_available(paths.harness)
        entries = discover_test_files(
            paths.test_dir, paths.test_suffix, configuration.name_filter
        )
        output_dir = prepare_output_directory(configuration.output_dir)
    except (TestDiscoveryError, TestDrivingError) as exc:
        raise RunExecutionError(str(exc)) from exc
    _LOGGER.debug("selected %d test files", len(entries))

    driver = HarnessDriver(
        harness=paths.harness,
        environment=build_child_environment(
            os.environ if base_environment is None else base_environment,
            endpoints.as_environment(),
            paths.runtime_bin_dir,
        ),
        output_dir=output_dir,
        stop_on_first=configuration.stop_on_first,
        stdout=stdout,
    )
    results = driver.run_all(entries)

    aggregate = aggregate_results(output_dir, elapsed_seconds=int(clock() - started))
    return RunOutcome(
        configuration=configuration,
        endpoints=endpoints,
        results=results,
        aggregate=aggregate,
    )


def _load_run_configuration(request: RunRequest) -> RunConfiguration:
    try:
        settings = load_runner_settings(request.config_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunConfiguration(
        settings=settings,
        name_filter=request.name_filter or None,
        stop_on_first=request.stop_on_first,
    )


def _resolve_endpoints(
    configuration: RunConfiguration,
    run_command: CommandRunner | None,
    endpoint_resolver_factory: EndpointResolverFactory | None,
) -> EndpointSet:
    services = configuration.settings.services
    try:
        zone_name = read_zone_name(run_command)
        if endpoint_resolver_factory is not None:
            resolver = endpoint_resolver_factory(zone_name, services.under_test)
        else:
            resolver = select_endpoint_resolver(
                zone_name, under_test=services.under_test, run_command=run_command
            )
        return probe_endpoints(services, zone_name=zone_name, resolver=resolver)
    except EnvironmentProbeError as exc:
        raise RunExecutionError(str(exc)) from exc
