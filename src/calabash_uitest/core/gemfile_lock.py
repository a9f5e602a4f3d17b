"""Pinned gem version lookup in a Gemfile.lock.

Only the first ``specs:`` section of the lockfile is considered; it runs
from the line containing ``specs:`` up to the first blank line after it.
Inside that section the first line of the form ``<gem> (<version>)`` wins.
This is deliberately not a Gemfile.lock parser.

Example::

    GEM
      remote: https://rubygems.org/
      specs:
        calabash-android (0.9.0)
          cucumber

    PLATFORMS
      ruby
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from calabash_uitest.exceptions import LockfileError

logger = logging.getLogger(__name__)

_SPECS_MARKER = "specs:"


def declarations_section(lockfile_text: str) -> list[str]:
    """Return the lines of the first ``specs:`` section, marker line included."""
    section: list[str] = []
    collecting = False
    for line in lockfile_text.splitlines():
        if not collecting and _SPECS_MARKER in line:
            collecting = True
        if not collecting:
            continue
        if line.strip() == "":
            break
        section.append(line)
    return section


def extract_pinned_version(lockfile_text: str, dependency_name: str) -> str:
    """Return the version pinned for *dependency_name*, or ``""``.

    Args:
        lockfile_text: Full Gemfile.lock content.
        dependency_name: Gem name, matched literally.

    Returns:
        The parenthesized version of the first matching declaration inside
        the ``specs:`` section, or an empty string if there is none.
    """
    pattern = re.compile(re.escape(dependency_name) + r" \((.+)\)")
    for line in declarations_section(lockfile_text):
        match = pattern.search(line)
        if match:
            return match.group(1)
    return ""


def pinned_version_from_file(path: str | Path, dependency_name: str) -> str:
    """Read a Gemfile.lock and extract the pinned version of *dependency_name*.

    Raises:
        LockfileError: If the file cannot be read.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LockfileError(f"failed to read Gemfile.lock at {path}: {exc}") from exc
    version = extract_pinned_version(content, dependency_name)
    logger.debug("%s pinned in %s: %r", dependency_name, path, version)
    return version
