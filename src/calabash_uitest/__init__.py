"""calabash-uitest: CI step that resolves, installs and runs calabash-android UI tests."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Gem driving the UI test suite.
CALABASH_GEM = "calabash-android"
