"""Checked invocation of platform utilities such as `zonename`, `vmadm` and `mdata-get`."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable

CommandRunner = Callable[[tuple[str, ...]], str]

_LOGGER = logging.getLogger(__name__)


class PlatformCommandError(Exception):
    """Raised when a platform utility cannot be run or exits non-zero."""


def run_platform_command(command: tuple[str, ...]) -> str:
    """Run one platform command and return its stripped standard output."""
    command_text = shlex.join(command)
    _LOGGER.debug("running %s", command_text)
    try:
        completed = subprocess.run(
            list(command),
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as exc:
        raise PlatformCommandError(f"Platform command not found: {command_text}") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip()
        suffix = f": {detail}" if detail else ""
        raise PlatformCommandError(
            f"Platform command failed with exit code {exc.returncode}: {command_text}{suffix}"
        ) from exc
    return completed.stdout.strip()
