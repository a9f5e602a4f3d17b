"""End-to-end calabash-android step.

Stages run strictly in order, each waiting for its external processes:

1. validate configuration
2. INTERNET permission check (when ``ANDROID_HOME`` is set)
3. resolve version and install mode
4. install the gem (query first in explicit-version mode)
5. find or generate the debug keystore
6. re-sign the APK and run the tests

Any failure raises a ``CalabashStepError`` and skips the remaining
stages. Reporting the result to the pipeline is the caller's job (see
``calabash_uitest.cli.main``), so that success and failure are exported
at exactly one point each.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from calabash_uitest import CALABASH_GEM
from calabash_uitest.config import StepConfig
from calabash_uitest.core.android_sdk import check_internet_permission
from calabash_uitest.core.driver import resign_and_run
from calabash_uitest.core.executor import CommandExecutor
from calabash_uitest.core.installer import ensure_installed
from calabash_uitest.core.keystore import ensure_debug_keystore
from calabash_uitest.core.progress import NullProgress, Progress
from calabash_uitest.core.resolution import ResolutionOutcome, ResolvedEnvironment, resolve
from calabash_uitest.core.ruby import RubyCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """What a successful run did.

    Attributes:
        environment: Gemfile detection result.
        outcome: Resolved install mode and version.
        keystore: Keystore the APK was re-signed with.
        installed: Whether any install command ran.
    """

    environment: ResolvedEnvironment
    outcome: ResolutionOutcome
    keystore: Path
    installed: bool


def determine_version(
    config: StepConfig,
    progress: Progress | None = None,
) -> tuple[ResolvedEnvironment, ResolutionOutcome]:
    """Run the resolution stage and narrate it."""
    progress = progress or NullProgress()
    progress.info(f"Determining {CALABASH_GEM} version...")

    env, outcome = resolve(config)
    for message in env.warnings:
        progress.warn(message)
    if env.gemfile_lock_path:
        progress.detail(f"Gemfile.lock exists at: {env.gemfile_lock_path}")
        progress.detail(f"{CALABASH_GEM} version in Gemfile.lock: {env.pinned_version}")
    if env.explicit_version:
        progress.detail(f"{CALABASH_GEM} version in configs: {env.explicit_version}")
    progress.done(outcome.describe())
    return env, outcome


def run_step(
    config: StepConfig,
    executor: CommandExecutor,
    progress: Progress | None = None,
    home: Path | None = None,
) -> StepResult:
    """Run every stage of the step.

    Args:
        config: Step inputs.
        executor: Runs every external command.
        progress: Human-readable progress sink.
        home: Home directory override for the keystore search.

    Raises:
        CalabashStepError: On the first unrecoverable failure.
    """
    progress = progress or NullProgress()

    config.validate()
    config = config.with_absolute_paths()

    if config.android_home:
        progress.info("Checking apk INTERNET permission...")
        aapt = check_internet_permission(executor, config.android_home, config.apk_path)
        progress.done(f"apk requests INTERNET permission (checked with {aapt})")
    else:
        progress.warn("ANDROID_HOME not set, skipping apk permission check")

    ruby = RubyCommand.detect(executor)
    env, outcome = determine_version(config, progress)

    progress.info(f"Installing {CALABASH_GEM} gem...")
    commands = ensure_installed(ruby, outcome, executor, progress)

    progress.info("Search for debug.keystore...")
    keystore = ensure_debug_keystore(executor, home=home, progress=progress)

    resign_and_run(ruby, executor, config.apk_path, outcome, config.work_dir, progress)

    logger.debug("step finished: mode=%s version=%r", outcome.mode.value, outcome.version)
    return StepResult(environment=env, outcome=outcome, keystore=keystore, installed=bool(commands))
