"""Tests for backend and tool schema version helpers."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from portainer_mcp.core.version import is_compatible_version, major_minor, parse_tools_version

_component = st.integers(min_value=0, max_value=999)


def test_major_minor_drops_patch_component() -> None:
    assert major_minor("2.31.2") == "2.31"
    assert major_minor("2.31") == "2.31"


def test_major_minor_returns_short_input_unchanged() -> None:
    assert major_minor("2") == "2"
    assert major_minor("") == ""


def test_patch_release_of_supported_version_is_compatible() -> None:
    assert is_compatible_version("2.31.0", "2.31.2")
    assert is_compatible_version("2.31.9", "2.31.2")


def test_other_minor_release_is_incompatible() -> None:
    assert not is_compatible_version("2.30.9", "2.31.2")
    assert not is_compatible_version("3.31.2", "2.31.2")


@given(_component, _component, _component, _component)
def test_any_patch_level_matches(major: int, minor: int, patch_a: int, patch_b: int) -> None:
    assert is_compatible_version(f"{major}.{minor}.{patch_a}", f"{major}.{minor}.{patch_b}")


@given(_component, _component, _component, _component)
def test_minor_mismatch_never_matches(major: int, minor: int, other: int, patch: int) -> None:
    if minor == other:
        return
    assert not is_compatible_version(f"{major}.{minor}.{patch}", f"{major}.{other}.{patch}")


def test_parse_tools_version() -> None:
    assert parse_tools_version("v1.2") == (1, 2)
    assert parse_tools_version(" v10.0 ") == (10, 0)
    assert parse_tools_version("1.2") is None
    assert parse_tools_version("v1") is None
    assert parse_tools_version("v1.2.3") is None
