"""Rich output formatting helpers for the calabash-uitest CLI.

Provides consistent, colored terminal output for the step's progress:
stage headers, details, conclusions, warnings, echoed commands, the
configuration table and the resolution summary.

Style Mapping:
    info = bold blue, detail = default, done = green, warn = yellow,
    error = bold red, command = dim
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from calabash_uitest.config import StepConfig
from calabash_uitest.core.resolution import InstallMode, ResolutionOutcome

_MODE_STYLES: dict[InstallMode, str] = {
    InstallMode.EXPLICIT_VERSION: "bold cyan",
    InstallMode.BUNDLER: "bold magenta",
    InstallMode.LATEST_GLOBAL: "bold green",
}

console = Console(highlight=False)


def mode_style(mode: InstallMode) -> str:
    """Return the Rich style string for a given install mode."""
    return _MODE_STYLES.get(mode, "white")


class ConsoleProgress:
    """``Progress`` implementation printing to the shared Rich console."""

    def __init__(self, out: Console | None = None) -> None:
        self._console = out or console

    def info(self, message: str) -> None:
        self._console.print()
        self._console.print(Text(message, style="bold blue"))

    def detail(self, message: str) -> None:
        self._console.print(Text(message))

    def done(self, message: str) -> None:
        self._console.print(Text(message, style="green"))

    def warn(self, message: str) -> None:
        self._console.print(Text(message, style="yellow"))

    def command(self, printable: str) -> None:
        self._console.print(Text(f"$ {printable}", style="dim"))


def print_error(message: str) -> None:
    """Print a fatal error message."""
    console.print(Text(message, style="bold red"))


def print_configs(config: StepConfig) -> None:
    """Print the step inputs as a table.

    Args:
        config: Step configuration.
    """
    table = Table(title="Configs", show_header=True, header_style="bold")
    table.add_column("Input", style="bold")
    table.add_column("Value")
    for name, value in config.as_dict().items():
        table.add_row(name, Text(value) if value else Text("-", style="dim"))
    console.print(table)


def print_outcome(outcome: ResolutionOutcome) -> None:
    """Print the resolved install mode and version.

    Args:
        outcome: Result of the install-mode decision.
    """
    header = Text.assemble(
        ("Mode: ", "bold"), (outcome.mode.value, mode_style(outcome.mode)),
        ("  Version: ", "bold"), (outcome.version or "latest", ""),
    )
    console.print(Panel(header, title="calabash-android Resolution"))
    if outcome.gemfile_path:
        console.print(Text.assemble(("  Gemfile: ", ""), (outcome.gemfile_path, "dim")))

