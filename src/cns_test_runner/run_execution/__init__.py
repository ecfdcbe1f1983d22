"""Run execution domain exports."""

from .integration_run_use_case import RunExecutionError, execute_integration_run
from .run_contracts import RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunExecutionError",
    "execute_integration_run",
]
