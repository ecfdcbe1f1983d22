"""Test driving domain exports."""

from .driver_outcomes import TestFileResult
from .harness_driver import (
    CAPTURE_SUFFIX,
    FAILING_LIST_FILENAME,
    HarnessDriver,
    TestDrivingError,
    build_child_environment,
    capture_path_for,
    ensure_harness_available,
    prepare_output_directory,
)

__all__ = [
    "CAPTURE_SUFFIX",
    "FAILING_LIST_FILENAME",
    "HarnessDriver",
    "TestDrivingError",
    "TestFileResult",
    "build_child_environment",
    "capture_path_for",
    "ensure_harness_available",
    "prepare_output_directory",
]
