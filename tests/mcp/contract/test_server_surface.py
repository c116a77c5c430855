"""Contract tests for server construction and the advertised tool surface."""

from __future__ import annotations

from importlib.metadata import requires
from typing import TYPE_CHECKING

import pytest
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent

from portainer_mcp.client.errors import PortainerClientError
from portainer_mcp.core.config import ServerConfig
from portainer_mcp.core.errors import BackendUnavailableError, IncompatibleVersionError
from portainer_mcp.mcp.server import (
    check_backend_version,
    create_server,
    get_registered_tool_annotations,
    list_registered_tool_names,
)

if TYPE_CHECKING:
    from unittest.mock import AsyncMock

    from portainer_mcp.mcp.schema import ToolSpec


def _config(**overrides: object) -> ServerConfig:
    return ServerConfig(url="https://portainer.example", token="ptr_test", **overrides)


@pytest.fixture
def supported_client(mock_client: AsyncMock) -> AsyncMock:
    mock_client.get_version.return_value = "2.31.2"
    return mock_client


# ---------------------------------------------------------------------------
# Version gate
# ---------------------------------------------------------------------------


async def test_supported_patch_release_passes(mock_client: AsyncMock) -> None:
    mock_client.get_version.return_value = "2.31.0"

    assert await check_backend_version(mock_client) == "2.31.0"


async def test_other_minor_release_fails_construction(mock_client: AsyncMock) -> None:
    mock_client.get_version.return_value = "2.30.9"

    with pytest.raises(IncompatibleVersionError) as exc_info:
        await create_server(_config(), mock_client)

    assert "unsupported Portainer server version: 2.30.9" in str(exc_info.value)
    assert "2.31.x" in str(exc_info.value)


async def test_disabled_check_skips_backend(mock_client: AsyncMock) -> None:
    server = await create_server(_config(disable_version_check=True), mock_client)

    mock_client.get_version.assert_not_awaited()
    assert len(list_registered_tool_names(server)) == 15


async def test_unreachable_backend_fails_construction(mock_client: AsyncMock) -> None:
    mock_client.get_version.side_effect = PortainerClientError("connection refused")

    with pytest.raises(BackendUnavailableError, match="connection refused"):
        await create_server(_config(), mock_client)


# ---------------------------------------------------------------------------
# Meta-tool surface
# ---------------------------------------------------------------------------


async def test_meta_tools_in_read_write_mode(supported_client: AsyncMock) -> None:
    server = await create_server(_config(), supported_client)

    names = list_registered_tool_names(server)
    assert len(names) == 15
    assert {"manage_environments", "manage_docker", "manage_system"} <= names
    annotations = get_registered_tool_annotations(server)
    assert annotations["manage_environments"].readOnlyHint is False


async def test_meta_tool_schema_has_action_enum(supported_client: AsyncMock) -> None:
    server = await create_server(_config(), supported_client)

    tool = next(t for t in server.tool_definitions if t.name == "manage_environments")
    schema = tool.inputSchema
    assert schema["required"] == ["action"]
    assert "delete_environment" in schema["properties"]["action"]["enum"]
    assert "userAccesses" in schema["properties"]
    assert "delete_environment" in tool.description


async def test_read_only_mode_filters_actions(supported_client: AsyncMock) -> None:
    server = await create_server(_config(read_only=True), supported_client)

    tools = {tool.name: tool for tool in server.tool_definitions}
    actions = tools["manage_environments"].inputSchema["properties"]["action"]["enum"]
    assert "list_environments" in actions
    assert "delete_environment" not in actions
    assert "delete_environment" not in tools["manage_environments"].description
    for tool in tools.values():
        assert tool.annotations.readOnlyHint is True
        assert tool.annotations.destructiveHint is False
    assert "READ-ONLY" in server.instructions


async def test_missing_schema_entries_are_skipped(
    supported_client: AsyncMock, tool_specs: dict[str, ToolSpec]
) -> None:
    partial = {"listEnvironments": tool_specs["listEnvironments"]}

    server = await create_server(_config(), supported_client, tools=partial)

    assert list_registered_tool_names(server) == {"manage_environments"}
    (tool,) = server.tool_definitions
    assert tool.inputSchema["properties"]["action"]["enum"] == ["list_environments"]


# ---------------------------------------------------------------------------
# Granular surface
# ---------------------------------------------------------------------------


async def test_granular_mode_exposes_every_operation(supported_client: AsyncMock) -> None:
    server = await create_server(_config(granular_tools=True), supported_client)

    names = list_registered_tool_names(server)
    assert len(names) == 98
    assert "getKubernetesResourceStripped" in names
    assert server.tool_definitions[0].name == "listEnvironments"


async def test_granular_read_only_mode(supported_client: AsyncMock) -> None:
    server = await create_server(_config(granular_tools=True, read_only=True), supported_client)

    annotations = get_registered_tool_annotations(server)
    assert len(annotations) == 44
    assert "deleteEnvironment" not in annotations
    assert all(value.readOnlyHint is True for value in annotations.values())


# ---------------------------------------------------------------------------
# Tool calls
# ---------------------------------------------------------------------------


async def test_list_tools_returns_definitions(supported_client: AsyncMock) -> None:
    server = await create_server(_config(), supported_client)

    tools = await server.list_tools()

    assert [tool.name for tool in tools] == [tool.name for tool in server.tool_definitions]


async def test_call_tool_returns_text_content(supported_client: AsyncMock) -> None:
    supported_client.create_team.return_value = 4
    server = await create_server(_config(), supported_client)

    content = await server.call_tool("manage_teams", {"action": "create_team", "name": "ops"})

    assert content == [TextContent(type="text", text="Team created successfully with ID: 4")]


async def test_call_tool_error_is_raised_as_tool_error(supported_client: AsyncMock) -> None:
    server = await create_server(_config(), supported_client)

    with pytest.raises(ToolError, match="invalid id parameter: id is required"):
        await server.call_tool("manage_teams", {"action": "get_team"})


def test_mcp_requirement_stays_on_fastmcp_line() -> None:
    mcp_requirements = [
        requirement
        for requirement in requires("portainer-mcp") or []
        if requirement.split(";")[0].replace(" ", "").startswith(("mcp>", "mcp<", "mcp="))
    ]

    assert len(mcp_requirements) == 1
    assert "<2" in mcp_requirements[0]
