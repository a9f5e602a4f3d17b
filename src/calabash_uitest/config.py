"""Step configuration --- the inputs of a calabash-android CI run.

The step is configured through environment variables set by the CI
pipeline (``apk_path``, ``gem_file_path``, ``calabash_android_version``,
``work_dir`` and ``ANDROID_HOME``). ``StepConfig`` captures them once,
immutably, and ``validate()`` rejects unusable inputs before any side
effect takes place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from calabash_uitest.exceptions import ConfigurationError

# Environment variable names, keyed by StepConfig field.
ENV_VARS: dict[str, str] = {
    "apk_path": "apk_path",
    "gem_file_path": "gem_file_path",
    "calabash_android_version": "calabash_android_version",
    "work_dir": "work_dir",
    "android_home": "ANDROID_HOME",
}


@dataclass(frozen=True)
class StepConfig:
    """Validated-once input record for a step run.

    Attributes:
        apk_path: APK to re-sign and test. Required; must be an existing file.
        gem_file_path: Gemfile enabling bundler detection. Optional; a
            missing file only narrows the mode (see ``resolve_environment``).
        calabash_android_version: Explicit gem version. Empty means
            unspecified.
        work_dir: Directory the resign and run commands execute in
            (where the ``features/`` folder lives). Empty means the
            current directory.
        android_home: Android SDK root used for the INTERNET permission
            check. Empty skips the check.
    """

    apk_path: str
    gem_file_path: str = ""
    calabash_android_version: str = ""
    work_dir: str = ""
    android_home: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> StepConfig:
        """Build a config from an environment mapping (e.g. ``os.environ``)."""
        values = {name: environ.get(var, "").strip() for name, var in ENV_VARS.items()}
        return cls(**values)

    def validate(self) -> None:
        """Check required inputs.

        Raises:
            ConfigurationError: If the APK path is empty or missing, or the
                work directory is set but is not a directory.
        """
        if not self.apk_path:
            raise ConfigurationError("no apk_path parameter specified")
        if not Path(self.apk_path).is_file():
            raise ConfigurationError(f"apk not exist at: {self.apk_path}")
        if self.work_dir and not Path(self.work_dir).is_dir():
            raise ConfigurationError(f"work_dir not exist at: {self.work_dir}")

    def with_absolute_paths(self) -> StepConfig:
        """Copy with every path input made absolute against the current directory.

        The resign and run commands execute inside ``work_dir``, so relative
        paths must be anchored before they are handed to them.
        """
        def absolute(value: str) -> str:
            return str(Path(value).absolute()) if value else ""

        return replace(
            self,
            apk_path=absolute(self.apk_path),
            gem_file_path=absolute(self.gem_file_path),
            work_dir=absolute(self.work_dir),
            android_home=absolute(self.android_home),
        )

    def as_dict(self) -> dict[str, str]:
        """Field name to value mapping, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
