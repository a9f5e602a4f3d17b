"""Test result export to the CI pipeline.

The pipeline reads the step's result from a shared key/value store that
is written with ``envman add --key <KEY>`` (value on stdin). The step
exports exactly once per run: ``succeeded`` on the success path or
``failed`` on the failure path.
"""

from __future__ import annotations

import logging
from typing import Protocol

from calabash_uitest.core.executor import Command, CommandExecutor, run_checked

logger = logging.getLogger(__name__)

RESULT_KEY = "BITRISE_XAMARIN_TEST_RESULT"
STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"


class PipelineReporter(Protocol):
    """Writes a key/value pair to the pipeline's shared environment."""

    def export(self, key: str, value: str) -> None:
        """Export *value* under *key*.

        Raises:
            CalabashStepError: If the export fails.
        """


class EnvmanReporter:
    """``PipelineReporter`` backed by the ``envman`` CLI."""

    def __init__(self, executor: CommandExecutor) -> None:
        self._executor = executor

    def export(self, key: str, value: str) -> None:
        logger.debug("envman export %s=%s", key, value)
        run_checked(self._executor, Command(("envman", "add", "--key", key), stdin=value))


def report_status(reporter: PipelineReporter, status: str, key: str = RESULT_KEY) -> str | None:
    """Export *status* without ever raising.

    Returns:
        None on success, or the error message if the export failed. Export
        failures must not mask the step's own result.
    """
    try:
        reporter.export(key, status)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to export environment: %s, error: %s", key, exc)
        return str(exc)
    return None
