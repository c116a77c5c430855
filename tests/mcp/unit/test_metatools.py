"""Tests for the meta-tool registry."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from portainer_mcp.mcp.metatools import META_TOOLS, get_meta_tool

if TYPE_CHECKING:
    from portainer_mcp.mcp.catalog import OperationCatalog


def test_every_operation_belongs_to_exactly_one_meta_tool(catalog: OperationCatalog) -> None:
    grouped = Counter(
        action.operation for meta_tool in META_TOOLS for action in meta_tool.actions
    )

    assert set(grouped) == set(catalog.names())
    assert all(count == 1 for count in grouped.values())


def test_action_names_are_unique_within_each_tool() -> None:
    for meta_tool in META_TOOLS:
        names = meta_tool.action_names()
        assert len(names) == len(set(names)), meta_tool.name


def test_meta_tool_names_are_unique() -> None:
    names = [meta_tool.name for meta_tool in META_TOOLS]

    assert len(names) == len(set(names)) == 15
    assert all(name.startswith("manage_") for name in names)


def test_find_maps_action_to_operation() -> None:
    meta_tool = get_meta_tool("manage_environments")

    assert meta_tool is not None
    action = meta_tool.find("get_environment")
    assert action is not None
    assert action.operation == "getEnvironment"
    assert meta_tool.find("no_such_action") is None
    assert get_meta_tool("manage_nothing") is None


def test_description_lists_given_actions() -> None:
    meta_tool = get_meta_tool("manage_users")
    assert meta_tool is not None

    description = meta_tool.description(["list_users", "get_user"])

    assert "Actions: list_users, get_user." in description
    assert "'action'" in description


def test_annotations_follow_mode() -> None:
    meta_tool = get_meta_tool("manage_stacks")
    assert meta_tool is not None

    read_only = meta_tool.annotations(read_only=True)
    assert read_only.readOnlyHint is True
    assert read_only.destructiveHint is False
    writable = meta_tool.annotations(read_only=False)
    assert writable.readOnlyHint is False
    assert writable.destructiveHint is True
    assert writable.title == "Manage Stacks"
