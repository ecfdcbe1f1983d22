"""Configuration domain exports."""

from .loader import ConfigurationError, load_runner_settings
from .runtime_settings import (
    GuardSettings,
    PathSettings,
    RunConfiguration,
    RunnerSettings,
    ServiceNames,
    default_output_dir,
    normalize_path,
)

__all__ = [
    "GuardSettings",
    "PathSettings",
    "RunConfiguration",
    "RunnerSettings",
    "ServiceNames",
    "ConfigurationError",
    "load_runner_settings",
    "default_output_dir",
    "normalize_path",
]
