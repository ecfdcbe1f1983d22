"""Result reporting domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TapCounts:
    """Assertion totals read from one TAP stream."""

    total: int = 0
    passed: int = 0

    def __add__(self, other: TapCounts) -> TapCounts:
        return TapCounts(total=self.total + other.total, passed=self.passed + other.passed)


@dataclass(frozen=True)
class RunAggregate:
    """Terminal summary of one run."""

    total: int
    passed: int
    failing_files: tuple[Path, ...]
    elapsed_seconds: int

    @property
    def failed(self) -> int:
        return max(self.total - self.passed, 0)

    @property
    def failing_file_count(self) -> int:
        return len(self.failing_files)
