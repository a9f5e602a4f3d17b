"""Ruby installation detection and RubyGems command construction.

The shape of gem management commands depends on how Ruby is installed:

- system Ruby (``/usr/bin/ruby``) needs ``sudo`` to install gems,
- Homebrew Ruby (``/usr/local/bin/ruby``) and RVM need nothing extra,
- rbenv needs ``rbenv rehash`` after an install so the new executable
  shims resolve on ``PATH``.

The installation type is detected once by ``RubyCommand.detect`` and every
command is built from it afterwards.
"""

from __future__ import annotations

import enum
import logging
import re

from calabash_uitest.core.executor import Command, CommandExecutor, run_checked
from calabash_uitest.exceptions import CommandError, RubyEnvironmentError

logger = logging.getLogger(__name__)

SYSTEM_RUBY_PATH = "/usr/bin/ruby"
BREW_RUBY_PATH = "/usr/local/bin/ruby"

_GEM_MANAGERS = ("gem", "bundle")
_SUDO_SUBCOMMANDS = ("install", "uninstall")


class RubyInstallType(enum.Enum):
    """Closed set of supported Ruby installation managers."""

    SYSTEM = "system"
    BREW = "brew"
    RVM = "rvm"
    RBENV = "rbenv"


def _command_exists(executor: CommandExecutor, args: tuple[str, ...]) -> bool:
    """True if *args* runs and exits 0."""
    try:
        return executor.capture(Command(args)).exit_succeeded
    except CommandError:
        return False


class RubyCommand:
    """Builds and runs gem management commands for one Ruby installation.

    Usage::

        ruby = RubyCommand.detect(executor)
        if not ruby.is_gem_installed("calabash-android", "0.9.0"):
            for cmd in ruby.gem_install_commands("calabash-android", "0.9.0"):
                run_checked(executor, cmd)
    """

    def __init__(self, install_type: RubyInstallType, executor: CommandExecutor) -> None:
        self.install_type = install_type
        self._executor = executor

    @classmethod
    def detect(cls, executor: CommandExecutor) -> RubyCommand:
        """Detect the Ruby installation type.

        Raises:
            CommandError: If ``which ruby`` fails.
            RubyEnvironmentError: If no known installation type matches.
        """
        which_ruby = run_checked(executor, Command(("which", "ruby"))).captured_output
        if which_ruby == SYSTEM_RUBY_PATH:
            install_type = RubyInstallType.SYSTEM
        elif which_ruby == BREW_RUBY_PATH:
            install_type = RubyInstallType.BREW
        elif _command_exists(executor, ("rvm", "-v")):
            install_type = RubyInstallType.RVM
        elif _command_exists(executor, ("rbenv", "-v")):
            install_type = RubyInstallType.RBENV
        else:
            raise RubyEnvironmentError(f"unknown ruby installation type (ruby at: {which_ruby})")
        logger.debug("ruby at %s detected as %s", which_ruby, install_type.value)
        return cls(install_type, executor)

    def sudo_needed(self, args: tuple[str, ...]) -> bool:
        """System Ruby needs sudo for ``gem``/``bundle`` install and uninstall."""
        if self.install_type is not RubyInstallType.SYSTEM or len(args) < 2:
            return False
        return args[0] in _GEM_MANAGERS and args[1] in _SUDO_SUBCOMMANDS

    def command(
        self,
        args: list[str] | tuple[str, ...],
        *,
        use_bundle: bool = False,
        env: dict[str, str] | None = None,
        cwd: str | None = None,
    ) -> Command:
        """Wrap *args* for this Ruby: optional ``bundle exec`` and ``sudo`` prefixes."""
        full = tuple(args)
        if use_bundle:
            full = ("bundle", "exec") + full
        if self.sudo_needed(full):
            full = ("sudo",) + full
        return Command(full, env=dict(env or {}), cwd=cwd or None)

    def gem_install_commands(self, gem: str, version: str = "") -> list[Command]:
        """Commands installing *gem*, pinned to *version* unless it is empty."""
        args = ["gem", "install", gem]
        if version:
            args += ["-v", version]
        args.append("--no-document")
        commands = [self.command(args)]
        if self.install_type is RubyInstallType.RBENV:
            commands.append(self.command(["rbenv", "rehash"]))
        return commands

    def bundle_install_command(self, gemfile_path: str) -> Command:
        """``bundle install`` against *gemfile_path*."""
        return self.command(
            ["bundle", "install", "--jobs", "20", "--retry", "5"],
            env={"BUNDLE_GEMFILE": gemfile_path},
        )

    def installed_versions(self, gem: str) -> list[str] | None:
        """Versions of *gem* reported by ``gem list``, or None if not listed.

        Raises:
            CommandError: If ``gem list`` fails.
        """
        out = run_checked(self._executor, self.command(["gem", "list"])).captured_output
        pattern = re.compile(r"^" + re.escape(gem) + r" \((?P<versions>.*)\)", re.MULTILINE)
        match = pattern.search(out)
        if match is None:
            return None
        versions = []
        for token in match.group("versions").split(", "):
            # Default gems are listed as "default: 1.2.3".
            versions.append(token.removeprefix("default: "))
        return versions

    def is_gem_installed(self, gem: str, version: str = "") -> bool:
        """Whether *version* of *gem* is installed (any version if empty).

        Versions are compared as exact strings.

        Raises:
            CommandError: If ``gem list`` fails.
        """
        versions = self.installed_versions(gem)
        if versions is None:
            return False
        if not version:
            return True
        return version in versions
