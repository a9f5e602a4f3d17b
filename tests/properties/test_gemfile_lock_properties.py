"""Property-based tests for Gemfile.lock version extraction.

Verifies that ``extract_pinned_version``:
- Finds a pin placed anywhere inside the ``specs:`` section
- Ignores pins placed after the section's terminating blank line
- Never raises on arbitrary text
"""
from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from calabash_uitest.core.gemfile_lock import declarations_section, extract_pinned_version


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

GEM = "calabash-android"

versions = st.from_regex(r"[0-9]{1,2}\.[0-9]{1,2}\.[0-9]{1,2}", fullmatch=True)
other_gems = st.lists(
    st.sampled_from(["cucumber", "awesome_print", "rubyzip", "slowhandcuke", "json"]),
    max_size=6,
)


def _spec_lines(names: list[str]) -> list[str]:
    return [f"    {name} (1.0.0)" for name in names]


class TestInsideSection:
    """Pins inside the section are found."""

    @given(version=versions, before=other_gems, after=other_gems)
    def test_pin_found(self, version: str, before: list[str], after: list[str]) -> None:
        lines = ["GEM", "  remote: https://rubygems.org/", "  specs:"]
        lines += _spec_lines(before) + [f"    {GEM} ({version})"] + _spec_lines(after)
        lines += ["", "PLATFORMS", "  ruby"]
        assert extract_pinned_version("\n".join(lines), GEM) == version


class TestOutsideSection:
    """Pins after the blank line are ignored."""

    @given(inside=other_gems, outside=versions)
    def test_pin_after_section_ignored(self, inside: list[str], outside: str) -> None:
        lines = ["  specs:"] + _spec_lines(inside) + ["", f"    {GEM} ({outside})"]
        assert extract_pinned_version("\n".join(lines), GEM) == ""

    @given(inside=versions, outside=versions)
    def test_inside_beats_outside(self, inside: str, outside: str) -> None:
        text = f"specs:\n    {GEM} ({inside})\n\nother: {GEM} ({outside})"
        assert extract_pinned_version(text, GEM) == inside


class TestRobustness:
    """Arbitrary input never raises."""

    @given(text=st.text(), name=st.text(min_size=1, max_size=12))
    def test_never_raises(self, text: str, name: str) -> None:
        result = extract_pinned_version(text, name)
        assert isinstance(result, str)

    @given(text=st.text())
    def test_section_has_no_blank_lines(self, text: str) -> None:
        assert all(line.strip() for line in declarations_section(text))
