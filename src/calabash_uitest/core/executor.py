"""Process execution behind a narrow, structured result type.

Every external tool the step invokes (``which``, ``gem``, ``bundle``,
``rbenv``, ``keytool``, ``aapt``, ``envman``, ``calabash-android``) runs
through ``CommandExecutor``. Callers only ever see a ``CommandResult``;
the decision logic never touches ``subprocess`` directly, so tests can
inject a fake executor instead of spawning processes.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field

from calabash_uitest.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """A command line plus the context it runs in.

    Attributes:
        args: Program and arguments.
        env: Variables added on top of the inherited environment.
        cwd: Working directory, or None for the current one.
        stdin: Text fed to the process's standard input, if any.
    """

    args: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)
    cwd: str | None = None
    stdin: str | None = None

    def printable(self) -> str:
        """Shell-quoted command line for progress output."""
        return shlex.join(self.args)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command.

    Attributes:
        exit_succeeded: True if the process exited with status 0.
        captured_output: Combined stdout/stderr, trimmed. Empty for
            streamed commands.
        exit_code: Raw exit status.
    """

    exit_succeeded: bool
    captured_output: str = ""
    exit_code: int = 0


class CommandExecutor:
    """Runs commands synchronously with ``subprocess``.

    No timeout is applied: a hanging tool hangs the step.
    """

    def _merged_env(self, command: Command) -> dict[str, str] | None:
        if not command.env:
            return None
        env = os.environ.copy()
        env.update(command.env)
        return env

    def capture(self, command: Command) -> CommandResult:
        """Run *command* and capture its combined, trimmed output.

        Raises:
            CommandError: If the process cannot be started.
        """
        logger.debug("capture: %s", command.printable())
        try:
            proc = subprocess.run(  # noqa: S603
                list(command.args),
                input=command.stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=command.cwd,
                env=self._merged_env(command),
                check=False,
            )
        except OSError as exc:
            raise CommandError(
                f"failed to start {command.args[0]}: {exc}",
                command=command.printable(),
            ) from exc
        return CommandResult(
            exit_succeeded=proc.returncode == 0,
            captured_output=(proc.stdout or "").strip(),
            exit_code=proc.returncode,
        )

    def stream(self, command: Command) -> CommandResult:
        """Run *command* with stdout/stderr inherited from this process.

        Raises:
            CommandError: If the process cannot be started.
        """
        logger.debug("stream: %s", command.printable())
        try:
            proc = subprocess.run(  # noqa: S603
                list(command.args),
                input=command.stdin,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=command.cwd,
                env=self._merged_env(command),
                check=False,
            )
        except OSError as exc:
            raise CommandError(
                f"failed to start {command.args[0]}: {exc}",
                command=command.printable(),
            ) from exc
        return CommandResult(exit_succeeded=proc.returncode == 0, exit_code=proc.returncode)


def run_checked(executor: CommandExecutor, command: Command, *, stream: bool = False) -> CommandResult:
    """Run *command* and raise unless it exits with status 0.

    Args:
        executor: Executor to run the command with.
        command: The command.
        stream: Forward output live instead of capturing it.

    Raises:
        CommandError: If the command fails to start or exits non-zero.
    """
    result = executor.stream(command) if stream else executor.capture(command)
    if not result.exit_succeeded:
        message = f"command failed with exit status {result.exit_code}: {command.printable()}"
        if result.captured_output:
            message += f"\n{result.captured_output}"
        raise CommandError(message, command=command.printable(), exit_code=result.exit_code)
    return result
