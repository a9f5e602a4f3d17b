"""Re-sign the APK and run the calabash-android test suite.

The invocation depends on the resolved mode:

- explicit version: ``calabash-android _<version>_ <subcommand> <apk>``,
  the RubyGems convention for selecting an installed gem version,
- bundler: ``bundle exec calabash-android <subcommand> <apk>`` with
  ``BUNDLE_GEMFILE`` pointing at the Gemfile,
- latest: ``calabash-android <subcommand> <apk>``.

Both commands stream their output straight to the step's own stdout and
stderr.
"""

from __future__ import annotations

from calabash_uitest import CALABASH_GEM
from calabash_uitest.core.executor import Command, CommandExecutor, run_checked
from calabash_uitest.core.progress import NullProgress, Progress
from calabash_uitest.core.resolution import InstallMode, ResolutionOutcome
from calabash_uitest.core.ruby import RubyCommand

RESIGN = "resign"
RUN = "run"


def version_qualifier(version: str) -> str:
    """RubyGems executable version selector, e.g. ``_0.9.0_``."""
    return f"_{version}_"


def build_tool_command(
    ruby: RubyCommand,
    subcommand: str,
    apk_path: str,
    outcome: ResolutionOutcome,
    work_dir: str = "",
) -> Command:
    """Build one calabash-android invocation for *outcome*."""
    args = [CALABASH_GEM]
    if outcome.mode is InstallMode.EXPLICIT_VERSION:
        args.append(version_qualifier(outcome.version))
    args += [subcommand, apk_path]

    env: dict[str, str] = {}
    if outcome.uses_bundler:
        env["BUNDLE_GEMFILE"] = outcome.gemfile_path
    return ruby.command(args, use_bundle=outcome.uses_bundler, env=env, cwd=work_dir)


def resign_and_run(
    ruby: RubyCommand,
    executor: CommandExecutor,
    apk_path: str,
    outcome: ResolutionOutcome,
    work_dir: str = "",
    progress: Progress | None = None,
) -> None:
    """Re-sign *apk_path*, then run the test suite against it.

    Raises:
        CommandError: If either command fails; the test run is skipped
            when re-signing fails.
    """
    progress = progress or NullProgress()

    progress.info("Resign apk with debug.keystore...")
    resign = build_tool_command(ruby, RESIGN, apk_path, outcome, work_dir)
    progress.command(resign.printable())
    run_checked(executor, resign, stream=True)

    progress.info(f"Running {CALABASH_GEM} test...")
    test = build_tool_command(ruby, RUN, apk_path, outcome, work_dir)
    progress.command(test.printable())
    run_checked(executor, test, stream=True)
