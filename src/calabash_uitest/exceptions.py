"""calabash-uitest exception hierarchy.

All public exceptions inherit from CalabashStepError, giving the CLI a
single base class to catch on its failure path without swallowing
unrelated errors.
"""

from __future__ import annotations


class CalabashStepError(Exception):
    """Base exception for all calabash-uitest errors."""


class ConfigurationError(CalabashStepError):
    """Raised when the step inputs are invalid.

    Covers a missing APK path, paths that do not exist, and a work
    directory that is not a directory.
    """


class LockfileError(ConfigurationError):
    """Raised when a Gemfile.lock exists but cannot be read."""


class CommandError(CalabashStepError):
    """Raised when an external command fails.

    Covers non-zero exits and OS-level failures (binary not found,
    permission denied) of every tool the step shells out to.

    Attributes:
        command: Printable command line that failed.
        exit_code: Process exit code, or None if the process never started.
    """

    def __init__(self, message: str, command: str = "", exit_code: int | None = None) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code


class RubyEnvironmentError(CalabashStepError):
    """Raised when the Ruby installation type cannot be determined."""


class AndroidSdkError(CalabashStepError):
    """Raised when the Android SDK check fails.

    Covers a missing ``aapt`` binary under ``build-tools`` and an APK
    that does not request the INTERNET permission.
    """


class KeystoreError(CalabashStepError):
    """Raised when the debug keystore location cannot be prepared."""
