"""Tests for the tool schema loader."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from portainer_mcp.core.errors import SchemaLoadError
from portainer_mcp.mcp.schema import ensure_tools_file, load_tools, parse_tools

if TYPE_CHECKING:
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.schema import ToolSpec

_MINIMAL = """\
version: {version}
tools:
  - name: listThings
    description: List things.
    parameters:
      - name: id
        type: number
        required: true
      - name: filter
        type: string
"""


def test_bundled_schema_covers_the_catalog(
    catalog: OperationCatalog, tool_specs: dict[str, ToolSpec]
) -> None:
    assert len(tool_specs) == 98
    assert set(tool_specs) == set(catalog.names())


def test_input_schema_marks_required_parameters(tool_specs: dict[str, ToolSpec]) -> None:
    schema = tool_specs["getEnvironment"].input_schema()

    assert schema["type"] == "object"
    assert schema["required"] == ["id"]
    assert schema["properties"]["id"]["type"] == "number"


def test_parse_preserves_definition_order() -> None:
    tools = parse_tools(_MINIMAL.format(version="v1.0"))

    assert list(tools) == ["listThings"]
    assert tools["listThings"].input_schema()["required"] == ["id"]


@pytest.mark.parametrize(
    ("text", "reason"),
    [
        (_MINIMAL.format(version="v0.9"), "older than the minimum supported version"),
        (_MINIMAL.format(version="'1.0'"), "invalid version"),
        ("tools: []\n", "missing version"),
        ("- just a list\n", "top level must be a mapping"),
        ("version: v1.0\ntools: [\n", "invalid YAML"),
        (
            "version: v1.0\ntools:\n  - name: a\n    parameters:\n      - name: x\n"
            "        type: integer\n",
            "invalid tool definition",
        ),
        (
            "version: v1.0\ntools:\n  - name: a\n  - name: a\n",
            "duplicate tool name 'a'",
        ),
    ],
)
def test_unusable_schema_is_rejected(text: str, reason: str) -> None:
    with pytest.raises(SchemaLoadError, match=reason):
        parse_tools(text, "tools.yaml")


def test_missing_file_is_a_schema_error(tmp_path: Path) -> None:
    with pytest.raises(SchemaLoadError, match="failed to load tools from"):
        load_tools(tmp_path / "absent.yaml")


def test_ensure_tools_file_writes_bundled_copy_once(tmp_path: Path) -> None:
    path = tmp_path / "tools.yaml"

    assert ensure_tools_file(path) is False
    assert path.exists()
    assert set(load_tools(path)) == set(load_tools())

    path.write_text(_MINIMAL.format(version="v1.1"), encoding="utf-8")
    assert ensure_tools_file(path) is True
    assert list(load_tools(path)) == ["listThings"]


def _parameter_description(tool: ToolSpec, name: str) -> str:
    return next(parameter.description for parameter in tool.parameters if parameter.name == name)


def test_bundled_schema_loads_without_a_path() -> None:
    tools = load_tools()

    assert len(tools) == 98
    assert _parameter_description(tools["updateAccessGroupUserAccesses"], "userAccesses").endswith(
        '[{"id": 1, "access": "standard_user"}]'
    )
    assert '"key": "all"' in _parameter_description(tools["dockerProxy"], "queryParams")
    assert _parameter_description(tools["updateSettings"], "settings").endswith(
        '{"EnableTelemetry": false}'
    )


def test_ensure_tools_file_reports_unwritable_destination(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(SchemaLoadError, match="cannot write default tool schema"):
        ensure_tools_file(blocker / "tools.yaml")
