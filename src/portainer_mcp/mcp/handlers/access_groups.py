"""Access group (endpoint group) operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import parse_access_map, validate_name

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def list_access_groups(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get access groups"):
        groups = await client.list_access_groups()
    return json_result(groups, "failed to marshal access groups")


async def create_access_group(client: PortainerClient, params: ParameterParser) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    environment_ids = params.get_int_array("environmentIds")
    with backend_call("failed to create access group"):
        group_id = await client.create_access_group(name, environment_ids)
    return text_result(f"Access group created successfully with ID: {group_id}")


async def update_access_group_name(client: PortainerClient, params: ParameterParser) -> ToolResult:
    group_id = params.get_id()
    name = validate_name(params.get_string("name", required=True))
    with backend_call("failed to update access group name"):
        await client.update_access_group_name(group_id, name)
    return text_result("Access group name updated successfully")


async def update_access_group_user_accesses(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    entries = params.get_object_array("userAccesses", required=True)
    user_accesses = parse_access_map(entries, "user accesses")
    with backend_call("failed to update access group user accesses"):
        await client.update_access_group_user_accesses(group_id, user_accesses)
    return text_result("Access group user accesses updated successfully")


async def update_access_group_team_accesses(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    entries = params.get_object_array("teamAccesses", required=True)
    team_accesses = parse_access_map(entries, "team accesses")
    with backend_call("failed to update access group team accesses"):
        await client.update_access_group_team_accesses(group_id, team_accesses)
    return text_result("Access group team accesses updated successfully")


async def add_environment_to_access_group(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    environment_id = params.get_id("environmentId")
    with backend_call("failed to add environment to access group"):
        await client.add_environment_to_access_group(group_id, environment_id)
    return text_result("Environment added to access group successfully")


async def remove_environment_from_access_group(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    environment_id = params.get_id("environmentId")
    with backend_call("failed to remove environment from access group"):
        await client.remove_environment_from_access_group(group_id, environment_id)
    return text_result("Environment removed from access group successfully")


def register_access_group_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listAccessGroups", list_access_groups, read)
    catalog.register("createAccessGroup", create_access_group, write)
    catalog.register("updateAccessGroupName", update_access_group_name, write)
    catalog.register("updateAccessGroupUserAccesses", update_access_group_user_accesses, write)
    catalog.register("updateAccessGroupTeamAccesses", update_access_group_team_accesses, write)
    catalog.register("addEnvironmentToAccessGroup", add_environment_to_access_group, write)
    catalog.register(
        "removeEnvironmentFromAccessGroup", remove_environment_from_access_group, write
    )
