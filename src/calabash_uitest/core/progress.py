"""Progress sink for human-readable step output.

Core modules announce what they are doing through a ``Progress`` object
instead of printing. The CLI supplies a Rich-backed implementation
(``calabash_uitest.cli.output.ConsoleProgress``); tests and library
callers can use ``NullProgress`` or record the calls.
"""

from __future__ import annotations

from typing import Protocol


class Progress(Protocol):
    """Receiver of stage headers, details and warnings."""

    def info(self, message: str) -> None:
        """Announce a new stage."""

    def detail(self, message: str) -> None:
        """Report a detail within the current stage."""

    def done(self, message: str) -> None:
        """Report a stage conclusion."""

    def warn(self, message: str) -> None:
        """Report a non-fatal problem."""

    def command(self, printable: str) -> None:
        """Echo a command line about to run."""


class NullProgress:
    """Progress sink that discards everything."""

    def info(self, message: str) -> None:
        pass

    def detail(self, message: str) -> None:
        pass

    def done(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def command(self, printable: str) -> None:
        pass
