"""Contract tests for tool call routing through the dispatcher."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from portainer_mcp.client.errors import PortainerAPIError, PortainerClientError
from portainer_mcp.client.models import Environment
from portainer_mcp.mcp.dispatch import Dispatcher
from portainer_mcp.mcp.server import build_granular_tools, build_meta_tools

if TYPE_CHECKING:
    from unittest.mock import AsyncMock

    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.schema import ToolSpec


def _meta_dispatcher(
    catalog: OperationCatalog,
    specs: dict[str, ToolSpec],
    client: AsyncMock,
    *,
    read_only: bool = False,
) -> Dispatcher:
    surface = build_meta_tools(catalog, specs, read_only)
    return Dispatcher(
        catalog,
        client,
        read_only=read_only,
        operations=surface.operations,
        meta_routes=surface.meta_routes,
    )


@pytest.fixture
def dispatcher(catalog, tool_specs, mock_client) -> Dispatcher:
    return _meta_dispatcher(catalog, tool_specs, mock_client)


async def test_action_routes_to_operation(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.get_environment.return_value = Environment(id=1, name="local")

    result = await dispatcher.dispatch(
        "manage_environments", {"action": "get_environment", "id": 1}
    )

    assert result.is_error is False
    assert json.loads(result.text)["name"] == "local"
    mock_client.get_environment.assert_awaited_once_with(1)


async def test_unknown_action_makes_no_backend_call(
    dispatcher: Dispatcher, mock_client: AsyncMock
) -> None:
    result = await dispatcher.dispatch("manage_environments", {"action": "explode"})

    assert result.is_error is True
    assert "unknown action 'explode' for manage_environments" in result.text
    assert "list_environments" in result.text
    assert mock_client.method_calls == []


async def test_missing_action(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    result = await dispatcher.dispatch("manage_environments", {})

    assert result.is_error is True
    assert result.text == "invalid action parameter: action is required"
    assert mock_client.method_calls == []


async def test_non_string_action(dispatcher: Dispatcher) -> None:
    result = await dispatcher.dispatch("manage_environments", {"action": 3})

    assert result.text == "invalid action parameter: action must be a string"


async def test_unknown_tool(dispatcher: Dispatcher) -> None:
    result = await dispatcher.dispatch("manage_everything", {"action": "list"})

    assert result.is_error is True
    assert result.text == "unknown tool: manage_everything"


async def test_missing_required_parameter(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    result = await dispatcher.dispatch("manage_environments", {"action": "get_environment"})

    assert result.text == "invalid id parameter: id is required"
    assert mock_client.method_calls == []


async def test_invalid_access_level_makes_no_backend_call(
    dispatcher: Dispatcher, mock_client: AsyncMock
) -> None:
    result = await dispatcher.dispatch(
        "manage_environments",
        {
            "action": "update_environment_user_accesses",
            "id": 1,
            "userAccesses": [{"id": 2, "access": "god_mode"}],
        },
    )

    assert result.is_error is True
    assert result.text == "invalid user accesses: invalid access level: god_mode"
    assert mock_client.method_calls == []


async def test_backend_failure_is_prefixed(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.delete_environment.side_effect = PortainerAPIError(404, "Object not found")

    result = await dispatcher.dispatch(
        "manage_environments", {"action": "delete_environment", "id": 9}
    )

    assert result.is_error is True
    assert result.text == "failed to delete environment: API error (status 404): Object not found"


async def test_transport_failure_is_prefixed(
    dispatcher: Dispatcher, mock_client: AsyncMock
) -> None:
    mock_client.list_users.side_effect = PortainerClientError("connection refused")

    result = await dispatcher.dispatch("manage_users", {"action": "list_users"})

    assert result.text == "failed to get users: connection refused"


async def test_unexpected_exception_becomes_internal_error(
    dispatcher: Dispatcher, mock_client: AsyncMock
) -> None:
    mock_client.list_environments.side_effect = RuntimeError("boom")

    result = await dispatcher.dispatch("manage_environments", {"action": "list_environments"})

    assert result.is_error is True
    assert result.text == "internal error: boom"


async def test_read_only_mode_hides_write_actions(
    catalog, tool_specs, mock_client: AsyncMock
) -> None:
    dispatcher = _meta_dispatcher(catalog, tool_specs, mock_client, read_only=True)

    result = await dispatcher.dispatch(
        "manage_environments", {"action": "delete_environment", "id": 1}
    )

    assert result.is_error is True
    assert "unknown action 'delete_environment'" in result.text
    assert mock_client.method_calls == []
    assert dispatcher.read_only is True


async def test_read_only_mode_drops_write_only_tools(catalog, tool_specs, mock_client) -> None:
    dispatcher = _meta_dispatcher(catalog, tool_specs, mock_client, read_only=True)

    assert "manage_environments" in dispatcher.tool_names()
    assert "manage_webhooks" in dispatcher.tool_names()


async def test_granular_routes_by_tool_name(catalog, tool_specs, mock_client) -> None:
    surface = build_granular_tools(catalog, tool_specs, read_only=False)
    dispatcher = Dispatcher(catalog, mock_client, read_only=False, operations=surface.operations)
    mock_client.create_environment_tag.return_value = 7

    result = await dispatcher.dispatch("createEnvironmentTag", {"name": "prod"})

    assert result.text == "Environment tag created successfully with ID: 7"
    mock_client.create_environment_tag.assert_awaited_once_with("prod")


async def test_write_operation_routed_in_read_only_mode_is_refused(
    catalog, mock_client: AsyncMock
) -> None:
    dispatcher = Dispatcher(
        catalog, mock_client, read_only=True, operations={"deleteEnvironment"}
    )

    result = await dispatcher.dispatch("deleteEnvironment", {"id": 1})

    assert result.is_error is True
    assert result.text.startswith("write operation reachable in read-only mode")
    assert mock_client.method_calls == []


async def test_route_to_unregistered_operation_is_refused(catalog, mock_client) -> None:
    dispatcher = Dispatcher(
        catalog,
        mock_client,
        read_only=False,
        meta_routes={"manage_extras": {"frobnicate": "frobnicateThing"}},
    )

    result = await dispatcher.dispatch("manage_extras", {"action": "frobnicate"})

    assert result.text == "operation routed but not registered: frobnicateThing"
