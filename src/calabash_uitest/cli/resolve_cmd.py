"""``calabash-uitest resolve`` — Show the calabash-android version and mode.

Nothing is installed or run; only the Gemfile and Gemfile.lock are read.

Exit Codes:
    0 — Resolution printed.
    1 — The Gemfile.lock could not be read.
"""

from __future__ import annotations

import json
import sys

import click

from calabash_uitest.cli.inputs import build_config, config_options
from calabash_uitest.cli.output import ConsoleProgress, print_error, print_outcome
from calabash_uitest.core.resolution import resolve
from calabash_uitest.exceptions import CalabashStepError


@click.command("resolve")
@config_options
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def resolve_command(output_format: str, **inputs: str) -> None:
    """Show the calabash-android version and install mode for the inputs.

    The APK is not required.
    """
    config = build_config(**inputs)
    try:
        env, outcome = resolve(config)
    except CalabashStepError as exc:
        print_error(f"{type(exc).__name__}: {exc}")
        sys.exit(1)

    if output_format == "json":
        data = outcome.as_dict()
        data["warnings"] = list(env.warnings)
        click.echo(json.dumps(data, indent=2))
        return

    for message in env.warnings:
        ConsoleProgress().warn(message)
    print_outcome(outcome)
