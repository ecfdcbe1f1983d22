"""Test driving domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TestFileResult:
    """Outcome of running the harness on one test file."""

    __test__ = False

    path: Path
    exit_status: int
    capture_path: Path
    error_message: str | None = None

    @property
    def passed(self) -> bool:
        return self.exit_status == 0

    @staticmethod
    def completed(path: Path, exit_status: int, capture_path: Path) -> TestFileResult:
        return TestFileResult(path=path, exit_status=exit_status, capture_path=capture_path)

    @staticmethod
    def spawn_failed(path: Path, capture_path: Path, error: Exception) -> TestFileResult:
        return TestFileResult(
            path=path,
            exit_status=127,
            capture_path=capture_path,
            error_message=str(error),
        )
