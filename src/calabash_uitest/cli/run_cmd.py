"""``calabash-uitest run`` — Resolve, install, re-sign and run the tests.

Prints the step inputs, runs every stage of the step and exports the
result to the pipeline. All failures share one exit path that prints the
error and exports ``failed``.

Exit Codes:
    0 — The test suite passed.
    1 — Invalid input, tool failure, or failing tests.
"""

from __future__ import annotations

import sys

import click

from calabash_uitest.cli.inputs import build_config, config_options
from calabash_uitest.cli.output import ConsoleProgress, print_configs, print_error
from calabash_uitest.core.executor import CommandExecutor
from calabash_uitest.core.reporter import (
    STATUS_FAILED,
    STATUS_SUCCEEDED,
    EnvmanReporter,
    PipelineReporter,
    report_status,
)
from calabash_uitest.core.step import run_step
from calabash_uitest.exceptions import CalabashStepError


def _register_fail(reporter: PipelineReporter, message: str) -> None:
    """Single failure path: report, export ``failed``, exit 1."""
    print_error(message)
    report_status(reporter, STATUS_FAILED)
    sys.exit(1)


@click.command("run")
@config_options
@click.pass_context
def run_command(ctx: click.Context, **inputs: str) -> None:
    """Resolve, install, re-sign and run the calabash-android test suite.

    Exports BITRISE_XAMARIN_TEST_RESULT=succeeded on success. On any
    failure prints the error, exports ``failed`` and exits with code 1.
    """
    obj = ctx.obj or {}
    executor = obj.get("executor") or CommandExecutor()
    reporter = obj.get("reporter") or EnvmanReporter(executor)
    config = build_config(**inputs)

    print_configs(config)
    try:
        run_step(config, executor, ConsoleProgress(), home=obj.get("home"))
    except CalabashStepError as exc:
        _register_fail(reporter, f"{type(exc).__name__}: {exc}")

    report_status(reporter, STATUS_SUCCEEDED)
    click.echo("\nThe result is: succeeded")
