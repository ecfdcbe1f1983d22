"""Configuration domain entities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_NAME = "cns"
DEFAULT_DEPENDENCIES = ("vmapi", "cnapi", "ufds")
DEFAULT_TEST_DIR = "test/integration"
DEFAULT_TEST_SUFFIX = ".test.js"
DEFAULT_HARNESS = "node_modules/.bin/tape"
DEFAULT_RUNTIME_BIN_DIR = "build/node/bin"
DEFAULT_GUARD_PLATFORM = "SunOS"
DEFAULT_GUARD_MARKER_FILE = "/lib/sdc/.sdc-test-no-production-data"


def default_output_dir(api_name: str) -> Path:
    return Path("/var/tmp") / f"{api_name}test"


@dataclass(frozen=True)
class ServiceNames:
    """Service under test and the dependencies whose endpoints tests need."""

    under_test: str
    dependencies: tuple[str, ...]

    @property
    def all(self) -> tuple[str, ...]:
        return (self.under_test, *self.dependencies)


@dataclass(frozen=True)
class GuardSettings:
    """Marker file required before tests may run on the target platform."""

    platform: str
    marker_file: Path


@dataclass(frozen=True)
class PathSettings:
    """Filesystem locations used by one run."""

    root_dir: Path
    test_dir: Path
    test_suffix: str
    harness: Path
    runtime_bin_dir: Path
    output_dir: Path


@dataclass(frozen=True)
class RunnerSettings:
    """Top-level configuration aggregate loaded before argument-level options apply."""

    api_name: str
    paths: PathSettings
    services: ServiceNames
    guard: GuardSettings
    source_path: Path | None = None


@dataclass(frozen=True)
class RunConfiguration:
    """Immutable configuration of one run: settings plus command-line options."""

    settings: RunnerSettings
    name_filter: str | None = None
    stop_on_first: bool = False

    @property
    def output_dir(self) -> Path:
        return self.settings.paths.output_dir


def normalize_path(path: Path | str) -> Path:
    """Collapse redundant separators, including the leading `//` POSIX normpath keeps."""
    normalized = os.path.normpath(path)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return Path(normalized)
