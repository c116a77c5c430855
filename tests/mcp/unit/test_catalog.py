"""Tests for the operation catalog and its permission filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from portainer_mcp.mcp.catalog import OperationCatalog, Permission
from portainer_mcp.mcp.envelope import text_result

if TYPE_CHECKING:
    from portainer_mcp.mcp.schema import ToolSpec


async def _noop(client, params):
    return text_result("ok")


def test_duplicate_registration_is_rejected() -> None:
    catalog = OperationCatalog()
    catalog.register("listThings", _noop, Permission.READ_ONLY_SAFE)

    with pytest.raises(ValueError, match="already registered"):
        catalog.register("listThings", _noop, Permission.READ_ONLY_SAFE)


def test_frozen_catalog_rejects_registration() -> None:
    catalog = OperationCatalog().freeze()

    with pytest.raises(RuntimeError, match="frozen"):
        catalog.register("listThings", _noop, Permission.READ_ONLY_SAFE)


def test_filter_for_mode() -> None:
    catalog = OperationCatalog()
    catalog.register("listThings", _noop, Permission.READ_ONLY_SAFE)
    catalog.register("deleteThing", _noop, Permission.WRITE_REQUIRED)

    assert catalog.filter_for_mode(read_only=False) == {"listThings", "deleteThing"}
    assert catalog.filter_for_mode(read_only=True) == {"listThings"}


def test_full_catalog_size(catalog: OperationCatalog) -> None:
    assert len(catalog) == 98
    assert len(catalog.filter_for_mode(read_only=True)) == 44


def test_read_only_mode_is_a_subset(catalog: OperationCatalog) -> None:
    read_only = catalog.filter_for_mode(read_only=True)

    assert read_only <= catalog.filter_for_mode(read_only=False)
    assert "listEnvironments" in read_only
    assert "getKubernetesResourceStripped" in read_only
    assert "deleteEnvironment" not in read_only
    assert "dockerProxy" not in read_only
    assert "kubernetesProxy" not in read_only


def test_permissions_agree_with_schema_hints(
    catalog: OperationCatalog, tool_specs: dict[str, ToolSpec]
) -> None:
    for operation in catalog:
        spec = tool_specs[operation.name]
        assert spec.annotations.read_only_hint is operation.read_only_safe, operation.name


def test_destructive_operations_require_write(
    catalog: OperationCatalog, tool_specs: dict[str, ToolSpec]
) -> None:
    for name, spec in tool_specs.items():
        if spec.annotations.destructive_hint:
            operation = catalog.get(name)
            assert operation is not None
            assert operation.permission is Permission.WRITE_REQUIRED, name
