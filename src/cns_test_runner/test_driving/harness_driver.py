"""Sequential harness execution with live tee of each test file's TAP stream."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import BinaryIO

from cns_test_runner.configuration.runtime_settings import normalize_path
from cns_test_runner.test_discovery.test_file_models import TestFileEntry

from .driver_outcomes import TestFileResult

_LOGGER = logging.getLogger(__name__)

CAPTURE_SUFFIX = ".tap"
FAILING_LIST_FILENAME = "failing-tests.txt"
_CHUNK_SIZE = 65536


class TestDrivingError(Exception):
    """Raised when the harness or output directory is unusable."""

    __test__ = False


def prepare_output_directory(output_dir: Path) -> Path:
    """Remove and recreate the output directory so every run starts empty."""
    normalized = normalize_path(output_dir)
    try:
        if normalized.exists():
            shutil.rmtree(normalized)
        normalized.mkdir(parents=True)
    except OSError as exc:
        raise TestDrivingError(f"Cannot prepare output directory {normalized}: {exc}") from exc
    return normalized


def ensure_harness_available(harness: Path) -> None:
    if not harness.is_file():
        raise TestDrivingError(f"Test harness not found: {harness}")
    if not os.access(harness, os.X_OK):
        raise TestDrivingError(f"Test harness is not executable: {harness}")


def build_child_environment(
    base_environment: Mapping[str, str],
    exported: Mapping[str, str],
    runtime_bin_dir: Path,
) -> dict[str, str]:
    """Inherited environment plus exported variables, with the bundled runtime first on PATH."""
    environment = dict(base_environment)
    environment.update(exported)
    current_path = environment.get("PATH", "")
    environment["PATH"] = (
        f"{runtime_bin_dir}{os.pathsep}{current_path}" if current_path else str(runtime_bin_dir)
    )
    return environment


def capture_path_for(output_dir: Path, entry: TestFileEntry) -> Path:
    return output_dir / f"{entry.basename}{CAPTURE_SUFFIX}"


class HarnessDriver:
    """Runs the TAP harness on test files one at a time."""

    def __init__(
        self,
        *,
        harness: Path,
        environment: Mapping[str, str],
        output_dir: Path,
        stop_on_first: bool = False,
        stdout: BinaryIO | None = None,
    ) -> None:
        self._harness = harness
        self._environment = dict(environment)
        self._output_dir = output_dir
        self._stop_on_first = stop_on_first
        self._stdout = stdout

    @property
    def failing_list_path(self) -> Path:
        return self._output_dir / FAILING_LIST_FILENAME

    def run_all(self, entries: Sequence[TestFileEntry]) -> tuple[TestFileResult, ...]:
        """Run every entry in order; stop after the first failure when configured to."""
        results: list[TestFileResult] = []
        for entry in entries:
            result = self.run_one(entry)
            results.append(result)
            if result.passed:
                continue
            self._record_failure(result)
            if self._stop_on_first:
                _LOGGER.debug("stopping after first failing file %s", entry.path)
                break
        return tuple(results)

    def run_one(self, entry: TestFileEntry) -> TestFileResult:
        sink = self._sink()
        sink.write(f"# {entry.path}\n".encode())
        sink.flush()

        capture_path = capture_path_for(self._output_dir, entry)
        command = [str(self._harness), str(entry.path)]
        _LOGGER.debug("launching %s", command)
        with capture_path.open("wb") as capture:
            try:
                process = subprocess.Popen(  # pylint: disable=consider-using-with
                    command,
                    stdout=subprocess.PIPE,
                    env=self._environment,
                )
            except OSError as exc:
                _LOGGER.error("could not launch harness for %s: %s", entry.path, exc)
                return TestFileResult.spawn_failed(entry.path, capture_path, exc)
            try:
                _tee(process, capture, sink)
            finally:
                exit_status = process.wait()

        _LOGGER.debug("%s exited with status %d", entry.path, exit_status)
        return TestFileResult.completed(entry.path, exit_status, capture_path)

    def _record_failure(self, result: TestFileResult) -> None:
        with self.failing_list_path.open("a", encoding="utf-8") as failing_list:
            failing_list.write(f"{result.path}\n")

    def _sink(self) -> BinaryIO:
        return self._stdout if self._stdout is not None else sys.stdout.buffer


def _tee(process: subprocess.Popen[bytes], capture: BinaryIO, sink: BinaryIO) -> None:
    stream = process.stdout
    if stream is None:
        return
    with stream:
        while True:
            chunk = os.read(stream.fileno(), _CHUNK_SIZE)
            if not chunk:
                break
            capture.write(chunk)
            sink.write(chunk)
            sink.flush()
