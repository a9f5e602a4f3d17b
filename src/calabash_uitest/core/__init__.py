"""Core of the calabash-android step: resolution, installation, signing, execution.

Submodules
----------
- ``gemfile_lock``: pinned version lookup in a Gemfile.lock.
- ``resolution``: Gemfile detection and the install-mode decision.
- ``executor``: process execution behind ``CommandResult``.
- ``ruby``: Ruby installation detection, gem query and install commands.
- ``installer``: brings the gem installation in line with the outcome.
- ``android_sdk``: newest ``aapt`` lookup and the INTERNET permission check.
- ``keystore``: debug keystore lookup and generation.
- ``driver``: resign and run invocations.
- ``reporter``: result export to the CI pipeline.
- ``step``: stage orchestration.

All public names are re-exported here.
"""

from calabash_uitest.core.executor import (
    Command,
    CommandExecutor,
    CommandResult,
    run_checked,
)
from calabash_uitest.core.gemfile_lock import (
    declarations_section,
    extract_pinned_version,
    pinned_version_from_file,
)
from calabash_uitest.core.resolution import (
    InstallMode,
    ResolutionOutcome,
    ResolvedEnvironment,
    decide_mode,
    resolve,
    resolve_environment,
)
from calabash_uitest.core.ruby import RubyCommand, RubyInstallType
from calabash_uitest.core.installer import ensure_installed, install_plan
from calabash_uitest.core.android_sdk import check_internet_permission, latest_build_tool
from calabash_uitest.core.keystore import ensure_debug_keystore, locate_keystore
from calabash_uitest.core.driver import build_tool_command, resign_and_run
from calabash_uitest.core.reporter import (
    RESULT_KEY,
    STATUS_FAILED,
    STATUS_SUCCEEDED,
    EnvmanReporter,
    PipelineReporter,
    report_status,
)
from calabash_uitest.core.step import StepResult, determine_version, run_step

__all__ = [
    "Command",
    "CommandExecutor",
    "CommandResult",
    "run_checked",
    "declarations_section",
    "extract_pinned_version",
    "pinned_version_from_file",
    "InstallMode",
    "ResolutionOutcome",
    "ResolvedEnvironment",
    "decide_mode",
    "resolve",
    "resolve_environment",
    "RubyCommand",
    "RubyInstallType",
    "ensure_installed",
    "install_plan",
    "check_internet_permission",
    "latest_build_tool",
    "ensure_debug_keystore",
    "locate_keystore",
    "build_tool_command",
    "resign_and_run",
    "RESULT_KEY",
    "STATUS_FAILED",
    "STATUS_SUCCEEDED",
    "EnvmanReporter",
    "PipelineReporter",
    "report_status",
    "StepResult",
    "determine_version",
    "run_step",
]
