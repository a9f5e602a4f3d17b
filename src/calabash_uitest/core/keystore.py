"""Debug keystore lookup and generation.

calabash-android re-signs the APK with a debug keystore. The first of
these that exists is used:

1. ``~/.android/debug.keystore`` (Android SDK)
2. ``~/.local/share/Mono for Android/debug.keystore`` (Xamarin)

If neither exists, a keystore is generated at the first location with the
standard Android debug signing parameters.
"""

from __future__ import annotations

import logging
from pathlib import Path

from calabash_uitest.core.executor import Command, CommandExecutor, run_checked
from calabash_uitest.core.progress import NullProgress, Progress
from calabash_uitest.exceptions import KeystoreError

logger = logging.getLogger(__name__)

ANDROID_KEYSTORE_REL = Path(".android") / "debug.keystore"
XAMARIN_KEYSTORE_REL = Path(".local") / "share" / "Mono for Android" / "debug.keystore"

KEY_ALIAS = "androiddebugkey"
STORE_PASSWORD = "android"
KEY_PASSWORD = "android"
KEY_ALGORITHM = "RSA"
KEY_SIZE = 2048
VALIDITY_DAYS = 10000
DISTINGUISHED_NAME = "CN=Android Debug,O=Android,C=US"


def keystore_candidates(home: Path) -> list[Path]:
    """Well-known keystore paths under *home*, in search order."""
    return [home / ANDROID_KEYSTORE_REL, home / XAMARIN_KEYSTORE_REL]


def locate_keystore(home: Path) -> Path | None:
    """Return the first existing well-known keystore, or None."""
    for candidate in keystore_candidates(home):
        if candidate.is_file():
            return candidate
        logger.debug("no debug keystore at %s", candidate)
    return None


def keytool_command(keystore: Path) -> Command:
    """``keytool -genkey`` invocation creating a debug keystore at *keystore*."""
    return Command((
        "keytool", "-genkey", "-v",
        "-keystore", str(keystore),
        "-alias", KEY_ALIAS,
        "-storepass", STORE_PASSWORD,
        "-keypass", KEY_PASSWORD,
        "-keyalg", KEY_ALGORITHM,
        "-keysize", str(KEY_SIZE),
        "-validity", str(VALIDITY_DAYS),
        "-dname", DISTINGUISHED_NAME,
    ))


def ensure_debug_keystore(
    executor: CommandExecutor,
    home: Path | None = None,
    progress: Progress | None = None,
) -> Path:
    """Find a debug keystore, generating one if none exists.

    Args:
        executor: Executor used to run ``keytool``.
        home: Home directory override (for testing).
        progress: Progress sink.

    Returns:
        Path of the keystore to sign with.

    Raises:
        KeystoreError: If the keystore directory cannot be created.
        CommandError: If ``keytool`` fails.
    """
    progress = progress or NullProgress()
    home_dir = home if home is not None else Path.home()

    found = locate_keystore(home_dir)
    if found is not None:
        progress.detail(f"using debug keystore: {found}")
        return found

    target = keystore_candidates(home_dir)[0]
    progress.warn(f"debug keystore not exist at any of: {', '.join(map(str, keystore_candidates(home_dir)))}")
    progress.detail("generating debug keystore")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise KeystoreError(f"failed to create keystore directory {target.parent}: {exc}") from exc

    command = keytool_command(target)
    progress.command(command.printable())
    run_checked(executor, command)
    progress.detail(f"using debug keystore: {target}")
    return target
