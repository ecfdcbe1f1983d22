"""Refuse to run integration tests on hosts that may hold production data."""

from __future__ import annotations

import platform
from collections.abc import Callable

from cns_test_runner.configuration.runtime_settings import GuardSettings

GUARD_EXIT_CODE = 2


class GuardRefusedError(Exception):
    """Raised when the no-production-data marker file is missing on the target platform."""

    exit_code = GUARD_EXIT_CODE


def guard_instructions(settings: GuardSettings) -> str:
    return (
        "To run this test you must create the file:\n"
        "\n"
        f"    {settings.marker_file}\n"
        "\n"
        "after ensuring you have no production data on this datacenter."
    )


def ensure_test_host(
    settings: GuardSettings,
    *,
    system_name: Callable[[], str] = platform.system,
) -> None:
    """Raise `GuardRefusedError` unless this host opted in to destructive tests."""
    if system_name() != settings.platform:
        return
    if not settings.marker_file.exists():
        raise GuardRefusedError(guard_instructions(settings))
