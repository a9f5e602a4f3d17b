"""Shared fixtures for calabash-uitest tests."""

from __future__ import annotations

import pathlib

import pytest

from tests.helpers import FakeExecutor, RecordingProgress, gemfile_lock


@pytest.fixture
def apk(tmp_path: pathlib.Path) -> pathlib.Path:
    """An (empty) APK file."""
    path = tmp_path / "app-debug.apk"
    path.write_bytes(b"PK\x03\x04")
    return path


@pytest.fixture
def gemfile(tmp_path: pathlib.Path) -> pathlib.Path:
    """A Gemfile with a Gemfile.lock pinning calabash-android 0.9.0."""
    project = tmp_path / "calabash"
    project.mkdir()
    gemfile = project / "Gemfile"
    gemfile.write_text("source 'https://rubygems.org'\ngem 'calabash-android'\n")
    (project / "Gemfile.lock").write_text(gemfile_lock("0.9.0"))
    return gemfile


@pytest.fixture
def gemfile_without_lock(tmp_path: pathlib.Path) -> pathlib.Path:
    """A Gemfile with no Gemfile.lock beside it."""
    project = tmp_path / "unlocked"
    project.mkdir()
    gemfile = project / "Gemfile"
    gemfile.write_text("gem 'calabash-android'\n")
    return gemfile


@pytest.fixture
def home(tmp_path: pathlib.Path) -> pathlib.Path:
    """An empty home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def executor() -> FakeExecutor:
    """A fake executor on a Homebrew Ruby with no gems installed."""
    return FakeExecutor()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()
