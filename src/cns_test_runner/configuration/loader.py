"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_API_NAME,
    DEFAULT_DEPENDENCIES,
    DEFAULT_GUARD_MARKER_FILE,
    DEFAULT_GUARD_PLATFORM,
    DEFAULT_HARNESS,
    DEFAULT_RUNTIME_BIN_DIR,
    DEFAULT_TEST_DIR,
    DEFAULT_TEST_SUFFIX,
    GuardSettings,
    PathSettings,
    RunnerSettings,
    ServiceNames,
    default_output_dir,
    normalize_path,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_runner_settings(
    config_path: Path | str | None = None, *, root_dir: Path | str | None = None
) -> RunnerSettings:
    """Load runner settings from an optional YAML file, falling back to the CNS defaults.

    Args:
      config_path: YAML file to read; ``None`` uses the defaults only.
      root_dir: Repository root used when the file does not set ``root_dir``.
        Defaults to the current working directory.

    Raises:
      ConfigurationError: If the file is missing, unparsable or holds invalid values.
    """
    parsed: Mapping[str, Any] = {}
    base_path = Path(root_dir) if root_dir is not None else Path.cwd()
    source_path: Path | None = None
    if config_path is not None:
        source_path = Path(config_path)
        parsed = _read_config_file(source_path)
        base_path = source_path.resolve().parent if root_dir is None else base_path

    api_name = _require_non_empty_string(parsed.get("api_name", DEFAULT_API_NAME), "api_name")
    resolved_root = base_path
    if parsed.get("root_dir") is not None:
        resolved_root = _resolve_path(
            base_path, _require_non_empty_string(parsed.get("root_dir"), "root_dir")
        )
    resolved_root = normalize_path(resolved_root.absolute())

    services = _parse_services_section(parsed.get("services"), api_name)
    return RunnerSettings(
        api_name=api_name,
        paths=_parse_paths_section(parsed.get("paths"), resolved_root, api_name),
        services=services,
        guard=_parse_guard_section(parsed.get("guard")),
        source_path=source_path.resolve() if source_path is not None else None,
    )


def _read_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parsed


def _parse_paths_section(value: Any, root_dir: Path, api_name: str) -> PathSettings:
    section = _optional_mapping(value, "paths")
    test_dir = _require_non_empty_string(
        section.get("test_dir", DEFAULT_TEST_DIR), "paths.test_dir"
    )
    test_suffix = _require_non_empty_string(
        section.get("test_suffix", DEFAULT_TEST_SUFFIX), "paths.test_suffix"
    )
    harness = _require_non_empty_string(section.get("harness", DEFAULT_HARNESS), "paths.harness")
    runtime_bin_dir = _require_non_empty_string(
        section.get("runtime_bin_dir", DEFAULT_RUNTIME_BIN_DIR), "paths.runtime_bin_dir"
    )
    output_dir_raw = section.get("output_dir")
    if output_dir_raw is None:
        output_dir = default_output_dir(api_name)
    else:
        output_dir = _resolve_path(
            root_dir, _require_non_empty_string(output_dir_raw, "paths.output_dir")
        )
    return PathSettings(
        root_dir=root_dir,
        test_dir=_resolve_path(root_dir, test_dir),
        test_suffix=test_suffix,
        harness=_resolve_path(root_dir, harness),
        runtime_bin_dir=_resolve_path(root_dir, runtime_bin_dir),
        output_dir=normalize_path(output_dir),
    )


def _parse_services_section(value: Any, api_name: str) -> ServiceNames:
    section = _optional_mapping(value, "services")
    under_test = _require_non_empty_string(
        section.get("under_test", api_name), "services.under_test"
    )
    dependencies = _normalize_string_sequence(
        section.get("dependencies", list(DEFAULT_DEPENDENCIES)), "services.dependencies"
    )
    if len(dependencies) != len(DEFAULT_DEPENDENCIES):
        raise ConfigurationError(
            f"services.dependencies must list exactly {len(DEFAULT_DEPENDENCIES)} services."
        )
    names = (under_test, *dependencies)
    if len(set(names)) != len(names):
        raise ConfigurationError("services must not repeat a service name.")
    return ServiceNames(under_test=under_test, dependencies=dependencies)


def _parse_guard_section(value: Any) -> GuardSettings:
    section = _optional_mapping(value, "guard")
    platform = _require_non_empty_string(
        section.get("platform", DEFAULT_GUARD_PLATFORM), "guard.platform"
    )
    marker_file = _require_non_empty_string(
        section.get("marker_file", DEFAULT_GUARD_MARKER_FILE), "guard.marker_file"
    )
    return GuardSettings(platform=platform, marker_file=Path(marker_file))


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, Sequence):
        items = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            items.append(item.strip())
    else:
        raise ConfigurationError(f"{field_name} must be a string or list of strings.")
    return tuple(item for item in items if item)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return base_path / candidate
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped
