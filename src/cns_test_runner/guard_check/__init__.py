"""Production guard domain exports."""

from .production_guard import GUARD_EXIT_CODE, GuardRefusedError, ensure_test_host

__all__ = ["GUARD_EXIT_CODE", "GuardRefusedError", "ensure_test_host"]
