"""Platform command domain exports."""

from .command_runner import CommandRunner, PlatformCommandError, run_platform_command

__all__ = ["CommandRunner", "PlatformCommandError", "run_platform_command"]
