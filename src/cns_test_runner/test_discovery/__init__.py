"""Test discovery domain exports."""

from .test_file_discovery import TestDiscoveryError, discover_test_files
from .test_file_models import TestFileEntry

__all__ = ["TestDiscoveryError", "TestFileEntry", "discover_test_files"]
