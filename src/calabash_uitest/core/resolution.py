"""calabash-android version and install-mode resolution.

Three inputs decide how the gem is installed and invoked:

- an explicit version from the step configuration,
- a Gemfile, with a Gemfile.lock next to it pinning the gem,
- neither.

Precedence is strict: an explicit version always wins, even when a
Gemfile pins a different one, because it is a direct request for a
specific global install. A pinned Gemfile comes next and switches the run
to bundler. Otherwise the latest release is installed globally.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

from calabash_uitest import CALABASH_GEM
from calabash_uitest.config import StepConfig
from calabash_uitest.core.gemfile_lock import pinned_version_from_file

logger = logging.getLogger(__name__)

GEMFILE_LOCK_NAME = "Gemfile.lock"


class InstallMode(enum.Enum):
    """How the gem is installed and invoked for a run."""

    EXPLICIT_VERSION = "explicit-version"
    BUNDLER = "bundler"
    LATEST_GLOBAL = "latest-global"


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of ``decide_mode``.

    Attributes:
        mode: The single active install mode.
        version: Effective gem version. Empty means latest. In bundler
            mode this is the Gemfile.lock pin, kept for display only;
            bundler resolves the exact version itself.
        gemfile_path: Gemfile used by bundler. Set only in bundler mode.
    """

    mode: InstallMode
    version: str = ""
    gemfile_path: str = ""

    @property
    def uses_bundler(self) -> bool:
        return self.mode is InstallMode.BUNDLER

    def describe(self) -> str:
        """One-line human description of the outcome."""
        if not self.version:
            return f"using {CALABASH_GEM} latest version"
        return f"using {CALABASH_GEM} version: {self.version}"

    def as_dict(self) -> dict[str, str]:
        return {
            "mode": self.mode.value,
            "version": self.version,
            "gemfile_path": self.gemfile_path,
        }


@dataclass(frozen=True)
class ResolvedEnvironment:
    """What ``resolve_environment`` found on disk.

    Attributes:
        gemfile_path: The Gemfile, if it and its lockfile both exist;
            otherwise empty.
        gemfile_lock_path: The Gemfile.lock that was read, or empty.
        pinned_version: Gem version pinned in the lockfile, or empty.
        explicit_version: Explicit version from the configuration.
        warnings: Soft detection misses, in the order they occurred.
    """

    gemfile_path: str = ""
    gemfile_lock_path: str = ""
    pinned_version: str = ""
    explicit_version: str = ""
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def manifest_present(self) -> bool:
        return bool(self.gemfile_path)


def resolve_environment(config: StepConfig, dependency_name: str = CALABASH_GEM) -> ResolvedEnvironment:
    """Inspect the configured Gemfile and its lockfile.

    A missing Gemfile or Gemfile.lock is not an error: it only means
    bundler is not used, and is reported in ``warnings``.

    Raises:
        LockfileError: If the Gemfile.lock exists but cannot be read.
    """
    warnings: list[str] = []
    gemfile_path = ""
    lock_path = ""
    pinned = ""

    if config.gem_file_path:
        gemfile = Path(config.gem_file_path).absolute()
        if not gemfile.is_file():
            warnings.append(f"Gemfile with {dependency_name} gem not found at: {gemfile}")
        else:
            lock = gemfile.parent / GEMFILE_LOCK_NAME
            if not lock.is_file():
                warnings.append(f"Gemfile.lock with {dependency_name} gem not found at: {lock}")
            else:
                gemfile_path = str(gemfile)
                lock_path = str(lock)
                pinned = pinned_version_from_file(lock, dependency_name)

    for message in warnings:
        logger.debug(message)

    return ResolvedEnvironment(
        gemfile_path=gemfile_path,
        gemfile_lock_path=lock_path,
        pinned_version=pinned,
        explicit_version=config.calabash_android_version,
        warnings=tuple(warnings),
    )


def decide_mode(
    explicit_version: str,
    manifest_present: bool,
    pinned_version: str,
    gemfile_path: str = "",
) -> ResolutionOutcome:
    """Pick the install mode. Pure and total over all inputs.

    Args:
        explicit_version: Version requested in the configuration, or empty.
        manifest_present: Whether a usable Gemfile was found.
        pinned_version: Version pinned in Gemfile.lock, or empty.
        gemfile_path: Gemfile recorded on a bundler outcome.

    Returns:
        The explicit-version outcome if a version was requested, else the
        bundler outcome if the Gemfile pins the gem, else latest-global.
    """
    if explicit_version:
        return ResolutionOutcome(InstallMode.EXPLICIT_VERSION, explicit_version)
    if manifest_present and pinned_version:
        return ResolutionOutcome(InstallMode.BUNDLER, pinned_version, gemfile_path)
    return ResolutionOutcome(InstallMode.LATEST_GLOBAL)


def resolve(config: StepConfig, dependency_name: str = CALABASH_GEM) -> tuple[ResolvedEnvironment, ResolutionOutcome]:
    """Resolve the environment and decide the mode in one call."""
    env = resolve_environment(config, dependency_name)
    outcome = decide_mode(
        env.explicit_version,
        env.manifest_present,
        env.pinned_version,
        env.gemfile_path,
    )
    logger.debug("resolution outcome: %s", outcome)
    return env, outcome
