"""Tests for the no-production-data guard."""

from __future__ import annotations

from pathlib import Path

import pytest
from cns_test_runner.configuration import GuardSettings
from cns_test_runner.guard_check import GUARD_EXIT_CODE, GuardRefusedError, ensure_test_host


def test_guard_refuses_on_target_platform_without_marker_file(tmp_path: Path) -> None:
    settings = GuardSettings(platform="SunOS", marker_file=tmp_path / ".no-production-data")

    with pytest.raises(GuardRefusedError) as excinfo:
        ensure_test_host(settings, system_name=lambda: "SunOS")

    assert str(tmp_path / ".no-production-data") in str(excinfo.value)
    assert "To run this test you must create the file" in str(excinfo.value)
    assert excinfo.value.exit_code == GUARD_EXIT_CODE == 2


def test_guard_allows_target_platform_with_marker_file(tmp_path: Path) -> None:
    marker = tmp_path / ".no-production-data"
    marker.touch()

    settings = GuardSettings(platform="SunOS", marker_file=marker)

    ensure_test_host(settings, system_name=lambda: "SunOS")


def test_guard_is_skipped_on_other_platforms(tmp_path: Path) -> None:
    settings = GuardSettings(platform="SunOS", marker_file=tmp_path / "missing")

    ensure_test_host(settings, system_name=lambda: "Linux")
