"""Shared test helpers: a fake command executor and lockfile builders.

``FakeExecutor`` stands in for ``CommandExecutor``. It records every
command and answers the handful of tools the step talks to (``which``,
``rvm``, ``rbenv``, ``gem``, ``bundle``, ``keytool``, ``aapt``,
``envman``, ``calabash-android``) from an in-memory gem registry.
"""

from __future__ import annotations

from calabash_uitest.core.executor import Command, CommandResult
from calabash_uitest.exceptions import CommandError

LATEST_VERSION = "0.9.8"


class FakeExecutor:
    """In-memory executor simulating a machine with Ruby installed.

    Attributes:
        which_ruby: Output of ``which ruby``.
        present: Optional tools that exist (e.g. ``{"rbenv"}``).
        installed: Gem name to installed versions.
        fail_on: Substrings; a command whose printable form contains one
            exits with status 1.
        aapt_output: Output of ``aapt dump permissions``.
        calls: Every command run, with ``"capture"`` or ``"stream"``.
    """

    def __init__(
        self,
        which_ruby: str = "/usr/local/bin/ruby",
        present: set[str] | None = None,
        installed: dict[str, list[str]] | None = None,
        fail_on: list[str] | None = None,
        aapt_output: str = "package: com.example\nuses-permission: name='android.permission.INTERNET'",
    ) -> None:
        self.which_ruby = which_ruby
        self.present = set(present or ())
        self.installed = {k: list(v) for k, v in (installed or {}).items()}
        self.fail_on = list(fail_on or [])
        self.aapt_output = aapt_output
        self.calls: list[tuple[str, Command]] = []

    # -- inspection ---------------------------------------------------------

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [command.args for _, command in self.calls]

    def commands_starting_with(self, *prefix: str) -> list[Command]:
        return [c for _, c in self.calls if _strip_sudo(c.args)[: len(prefix)] == prefix]

    # -- executor interface -------------------------------------------------

    def capture(self, command: Command) -> CommandResult:
        self.calls.append(("capture", command))
        return self._respond(command)

    def stream(self, command: Command) -> CommandResult:
        self.calls.append(("stream", command))
        result = self._respond(command)
        return CommandResult(result.exit_succeeded, "", result.exit_code)

    # -- simulation ---------------------------------------------------------

    def _respond(self, command: Command) -> CommandResult:
        printable = command.printable()
        for needle in self.fail_on:
            if needle in printable:
                return CommandResult(False, f"{needle} failed", 1)

        args = _strip_sudo(command.args)
        program = args[0]
        if program in ("rvm", "rbenv") and program not in self.present:
            raise CommandError(f"failed to start {program}", command=printable)
        if program == "which":
            return CommandResult(True, self.which_ruby)
        if args[:2] == ("gem", "list"):
            return CommandResult(True, self._gem_list())
        if args[:2] == ("gem", "install"):
            self._gem_install(args)
        if program.endswith("aapt"):
            return CommandResult(True, self.aapt_output)
        return CommandResult(True, "")

    def _gem_list(self) -> str:
        lines = ["*** LOCAL GEMS ***", ""]
        for name in sorted(self.installed):
            lines.append(f"{name} ({', '.join(self.installed[name])})")
        return "\n".join(lines)

    def _gem_install(self, args: tuple[str, ...]) -> None:
        gem = args[2]
        version = args[args.index("-v") + 1] if "-v" in args else LATEST_VERSION
        versions = self.installed.setdefault(gem, [])
        if version not in versions:
            versions.insert(0, version)


def _strip_sudo(args: tuple[str, ...]) -> tuple[str, ...]:
    return args[1:] if args and args[0] == "sudo" else args


def gemfile_lock(calabash_version: str = "0.9.0") -> str:
    """A realistic Gemfile.lock pinning calabash-android."""
    return (
        "GEM\n"
        "  remote: https://rubygems.org/\n"
        "  specs:\n"
        "    awesome_print (1.8.0)\n"
        f"    calabash-android ({calabash_version})\n"
        "      awesome_print (~> 1.2)\n"
        "      cucumber\n"
        "    cucumber (3.1.2)\n"
        "\n"
        "PLATFORMS\n"
        "  ruby\n"
        "\n"
        "DEPENDENCIES\n"
        "  calabash-android\n"
        "\n"
        "BUNDLED WITH\n"
        "   1.16.1\n"
    )


class RecordingProgress:
    """``Progress`` sink that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def detail(self, message: str) -> None:
        self.messages.append(("detail", message))

    def done(self, message: str) -> None:
        self.messages.append(("done", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    def command(self, printable: str) -> None:
        self.messages.append(("command", printable))

    def of(self, kind: str) -> list[str]:
        return [m for k, m in self.messages if k == kind]
