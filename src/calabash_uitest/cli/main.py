"""calabash-uitest CLI — calabash-android UI test step for CI pipelines.

Entry point for the ``calabash-uitest`` command-line tool. Registers all
subcommands under a single Click group. Every input can be given as an
option or through the step's environment variable.

Commands:
    run      — Resolve, install, re-sign and run the calabash-android tests.
    resolve  — Show which calabash-android version and mode would be used.

Usage::

    apk_path=app.apk calabash-uitest run
    calabash-uitest run --apk-path app.apk --gem-file-path ./Gemfile
    calabash-uitest resolve --gem-file-path ./Gemfile --format json
"""

from __future__ import annotations

import logging

import click

from calabash_uitest import __version__
from calabash_uitest.cli.resolve_cmd import resolve_command
from calabash_uitest.cli.run_cmd import run_command

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    envvar="STEP_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Diagnostic logging level (default: WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """calabash-uitest: run calabash-android UI tests in a CI step.

    Resolves the calabash-android version (explicit input, Gemfile.lock or
    latest), installs it, re-signs the APK with a debug keystore and runs
    the test suite, exporting the result to the pipeline.
    """
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)
    ctx.ensure_object(dict)


# Register all subcommands
cli.add_command(run_command)
cli.add_command(resolve_command)
