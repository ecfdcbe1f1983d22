"""Command line interface entry point."""

from __future__ import annotations

import logging
import os
import sys

import click

from cns_test_runner.guard_check import GuardRefusedError
from cns_test_runner.result_reporting import render_summary
from cns_test_runner.run_execution import RunExecutionError, RunRequest, execute_integration_run

PROG_NAME = "cns-test-runner"
TRACE_ENV_VAR = "TRACE"
USAGE_ERROR_EXIT_CODE = 1


class CliError(Exception):
    """Custom CLI error."""


def _configure_logging() -> None:
    level = logging.DEBUG if os.environ.get(TRACE_ENV_VAR) else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format=f"{PROG_NAME}: %(levelname)s %(name)s: %(message)s",
    )


@click.command(name=PROG_NAME, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cns-test-runner")
@click.option(
    "-f",
    "name_filter",
    metavar="SUBSTRING",
    default=None,
    help="Only run test files whose path contains SUBSTRING.",
)
@click.option(
    "-s",
    "stop_on_first",
    is_flag=True,
    default=False,
    help="Stop after the first test file that exits non-zero.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML file overriding repository paths, services and guard settings.",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force or disable ANSI colors in the summary (default: only on a terminal).",
)
def cli(
    name_filter: str | None, stop_on_first: bool, config_path: str | None, color: bool | None
) -> None:
    """Run the CNS integration tests and summarize their TAP output.

    The exit status is the number of test files that failed.
    """
    _configure_logging()
    try:
        outcome = execute_integration_run(
            RunRequest(
                config_path=config_path,
                name_filter=name_filter,
                stop_on_first=stop_on_first,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for line in render_summary(outcome.aggregate):
        click.echo(line, color=color)
    click.get_current_context().exit(outcome.exit_code)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), prog_name=PROG_NAME, standalone_mode=False)
    except GuardRefusedError as exc:
        click.echo(str(exc))
        return exc.exit_code
    except CliError as exc:
        click.echo(f"{PROG_NAME}: {exc}", err=True)
        return 1
    except click.UsageError as exc:
        exc.show()
        return USAGE_ERROR_EXIT_CODE
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
