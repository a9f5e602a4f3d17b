"""Install the calabash-android gem according to the resolved mode.

- Bundler mode always runs ``bundle install``; bundler reconciles the
  Gemfile.lock against installed gems itself.
- Explicit-version mode asks ``gem list`` first and installs only when the
  requested version is missing.
- Latest-global mode runs ``gem install`` without a version pin.

At most one installation is attempted per run. Steps run in order and the
first failing step aborts the run.
"""

from __future__ import annotations

import logging

from calabash_uitest import CALABASH_GEM
from calabash_uitest.core.executor import Command, CommandExecutor, run_checked
from calabash_uitest.core.progress import NullProgress, Progress
from calabash_uitest.core.resolution import InstallMode, ResolutionOutcome
from calabash_uitest.core.ruby import RubyCommand

logger = logging.getLogger(__name__)


def install_plan(ruby: RubyCommand, outcome: ResolutionOutcome, gem: str = CALABASH_GEM) -> list[Command]:
    """Commands that would install *gem* for *outcome*, without the query step."""
    if outcome.mode is InstallMode.BUNDLER:
        return [ruby.bundle_install_command(outcome.gemfile_path)]
    return ruby.gem_install_commands(gem, outcome.version)


def ensure_installed(
    ruby: RubyCommand,
    outcome: ResolutionOutcome,
    executor: CommandExecutor,
    progress: Progress | None = None,
    gem: str = CALABASH_GEM,
) -> list[Command]:
    """Bring the gem installation in line with *outcome*.

    Returns:
        The commands that were run (empty if the gem was already present).

    Raises:
        CommandError: If ``gem list`` or any install step fails.
    """
    progress = progress or NullProgress()

    if outcome.mode is InstallMode.EXPLICIT_VERSION:
        if ruby.is_gem_installed(gem, outcome.version):
            progress.detail(f"{gem} {outcome.version} installed")
            return []

    commands = install_plan(ruby, outcome, gem)
    for command in commands:
        progress.command(command.printable())
        run_checked(executor, command, stream=True)
    logger.debug("installed %s via %d command(s)", gem, len(commands))
    return commands
