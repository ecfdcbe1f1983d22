"""Result reporting domain exports."""

from .report_models import RunAggregate, TapCounts
from .summary_reporter import aggregate_results, read_failing_files, render_summary
from .tap_summary import parse_tap_counts

__all__ = [
    "RunAggregate",
    "TapCounts",
    "aggregate_results",
    "parse_tap_counts",
    "read_failing_files",
    "render_summary",
]
