"""Step input options shared by the ``run`` and ``resolve`` subcommands.

Every input can be given on the command line or through the environment
variable the CI pipeline sets for the step.
"""

from __future__ import annotations

import click

from calabash_uitest.config import ENV_VARS, StepConfig


def config_options(func):
    """Attach the step input options, each backed by its environment variable."""
    options = [
        click.option("--apk-path", envvar=ENV_VARS["apk_path"], default="",
                     help="APK to re-sign and test [env: apk_path]."),
        click.option("--gem-file-path", envvar=ENV_VARS["gem_file_path"], default="",
                     help="Gemfile declaring calabash-android [env: gem_file_path]."),
        click.option("--calabash-android-version", envvar=ENV_VARS["calabash_android_version"],
                     default="",
                     help="Use this calabash-android version, overriding the Gemfile "
                          "[env: calabash_android_version]."),
        click.option("--work-dir", envvar=ENV_VARS["work_dir"], default="",
                     help="Directory to run calabash-android in [env: work_dir]."),
        click.option("--android-home", envvar=ENV_VARS["android_home"], default="",
                     help="Android SDK root for the permission check [env: ANDROID_HOME]."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(**inputs: str) -> StepConfig:
    """Build a ``StepConfig`` from the collected option values."""
    return StepConfig(**{name: (value or "").strip() for name, value in inputs.items()})
