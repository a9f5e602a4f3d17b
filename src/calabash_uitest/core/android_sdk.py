"""Android SDK lookups: the newest ``aapt`` and the APK's INTERNET permission.

calabash-android drives the app through an HTTP test server inside the
instrumented APK, so the APK must request
``android.permission.INTERNET``. The check uses ``aapt dump permissions``
from the newest installed ``build-tools`` version.
"""

from __future__ import annotations

import logging
from pathlib import Path

from packaging.version import InvalidVersion, Version

from calabash_uitest.core.executor import Command, CommandExecutor, run_checked
from calabash_uitest.exceptions import AndroidSdkError

logger = logging.getLogger(__name__)

INTERNET_PERMISSION = "android.permission.INTERNET"


def _build_tools_versions(android_home: Path) -> list[tuple[Version, Path]]:
    """``build-tools`` subdirectories with parseable version names, newest first."""
    build_tools = android_home / "build-tools"
    if not build_tools.is_dir():
        return []
    try:
        entries = list(build_tools.iterdir())
    except OSError as exc:
        raise AndroidSdkError(f"failed to list {build_tools}: {exc}") from exc
    found: list[tuple[Version, Path]] = []
    for entry in entries:
        if not entry.is_dir():
            continue
        try:
            found.append((Version(entry.name), entry))
        except InvalidVersion:
            logger.debug("skipping build-tools dir with non-version name: %s", entry.name)
    found.sort(key=lambda item: item[0], reverse=True)
    return found


def latest_build_tool(android_home: str | Path, tool: str = "aapt") -> Path:
    """Path of *tool* in the newest ``build-tools/<version>`` that has it.

    Raises:
        AndroidSdkError: If no build-tools version ships *tool*.
    """
    home = Path(android_home)
    for _version, directory in _build_tools_versions(home):
        candidate = directory / tool
        if candidate.is_file():
            return candidate
    raise AndroidSdkError(f"failed to find {tool} in {home / 'build-tools'}")


def apk_permissions(executor: CommandExecutor, aapt: Path, apk_path: str) -> list[str]:
    """Permissions requested by *apk_path*, as reported by ``aapt``.

    Raises:
        CommandError: If ``aapt`` fails.
    """
    out = run_checked(executor, Command((str(aapt), "dump", "permissions", apk_path))).captured_output
    permissions = []
    for line in out.splitlines():
        line = line.strip()
        if not line.startswith("uses-permission"):
            continue
        # aapt prints either "uses-permission: X" or "uses-permission: name='X'".
        value = line.split(":", 1)[1].strip()
        if value.startswith("name="):
            value = value[len("name="):].strip("'\"")
        permissions.append(value)
    return permissions


def check_internet_permission(executor: CommandExecutor, android_home: str, apk_path: str) -> Path:
    """Ensure *apk_path* requests the INTERNET permission.

    Returns:
        The ``aapt`` binary used.

    Raises:
        AndroidSdkError: If ``aapt`` is missing or the permission is absent.
        CommandError: If ``aapt`` fails.
    """
    aapt = latest_build_tool(android_home)
    logger.debug("using aapt: %s", aapt)
    if INTERNET_PERMISSION not in apk_permissions(executor, aapt, apk_path):
        raise AndroidSdkError(
            f"apk at {apk_path} does not request {INTERNET_PERMISSION}, "
            "which calabash-android needs to reach the test server"
        )
    return aapt
