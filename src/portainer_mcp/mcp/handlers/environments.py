"""Environment, environment group (edge group) and tag operations."""

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


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------


async def list_environments(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get environments"):
        environments = await client.list_environments()
    return json_result(environments, "failed to marshal environments")


async def get_environment(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id()
    with backend_call("failed to get environment"):
        environment = await client.get_environment(environment_id)
    return json_result(environment, "failed to marshal environment")


async def delete_environment(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id()
    with backend_call("failed to delete environment"):
        await client.delete_environment(environment_id)
    return text_result("Environment deleted successfully")


async def snapshot_environment(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id()
    with backend_call("failed to snapshot environment"):
        await client.snapshot_environment(environment_id)
    return text_result("Environment snapshot created successfully")


async def snapshot_all_environments(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    with backend_call("failed to snapshot all environments"):
        await client.snapshot_all_environments()
    return text_result("All environment snapshots created successfully")


async def update_environment_tags(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id()
    tag_ids = params.get_int_array("tagIds", required=True)
    with backend_call("failed to update environment tags"):
        await client.update_environment_tags(environment_id, tag_ids)
    return text_result("Environment tags updated successfully")


async def update_environment_user_accesses(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    environment_id = params.get_id()
    entries = params.get_object_array("userAccesses", required=True)
    user_accesses = parse_access_map(entries, "user accesses")
    with backend_call("failed to update environment user accesses"):
        await client.update_environment_user_accesses(environment_id, user_accesses)
    return text_result("Environment user accesses updated successfully")


async def update_environment_team_accesses(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    environment_id = params.get_id()
    entries = params.get_object_array("teamAccesses", required=True)
    team_accesses = parse_access_map(entries, "team accesses")
    with backend_call("failed to update environment team accesses"):
        await client.update_environment_team_accesses(environment_id, team_accesses)
    return text_result("Environment team accesses updated successfully")


# ---------------------------------------------------------------------------
# Environment groups
# ---------------------------------------------------------------------------


async def list_environment_groups(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get environment groups"):
        groups = await client.list_environment_groups()
    return json_result(groups, "failed to marshal environment groups")


async def create_environment_group(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    environment_ids = params.get_int_array("environmentIds", required=True)
    with backend_call("failed to create environment group"):
        group_id = await client.create_environment_group(name, environment_ids)
    return text_result(f"Environment group created successfully with ID: {group_id}")


async def update_environment_group_name(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    name = validate_name(params.get_string("name", required=True))
    with backend_call("failed to update environment group name"):
        await client.update_environment_group_name(group_id, name)
    return text_result("Environment group name updated successfully")


async def update_environment_group_environments(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    environment_ids = params.get_int_array("environmentIds", required=True)
    with backend_call("failed to update environment group environments"):
        await client.update_environment_group_environments(group_id, environment_ids)
    return text_result("Environment group environments updated successfully")


async def update_environment_group_tags(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    group_id = params.get_id()
    tag_ids = params.get_int_array("tagIds", required=True)
    with backend_call("failed to update environment group tags"):
        await client.update_environment_group_tags(group_id, tag_ids)
    return text_result("Environment group tags updated successfully")


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


async def list_environment_tags(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get environment tags"):
        tags = await client.list_environment_tags()
    return json_result(tags, "failed to marshal environment tags")


async def create_environment_tag(client: PortainerClient, params: ParameterParser) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    with backend_call("failed to create environment tag"):
        tag_id = await client.create_environment_tag(name)
    return text_result(f"Environment tag created successfully with ID: {tag_id}")


async def delete_environment_tag(client: PortainerClient, params: ParameterParser) -> ToolResult:
    tag_id = params.get_id()
    with backend_call("failed to delete environment tag"):
        await client.delete_environment_tag(tag_id)
    return text_result("Environment tag deleted successfully")


def register_environment_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listEnvironments", list_environments, read)
    catalog.register("getEnvironment", get_environment, read)
    catalog.register("deleteEnvironment", delete_environment, write)
    catalog.register("snapshotEnvironment", snapshot_environment, write)
    catalog.register("snapshotAllEnvironments", snapshot_all_environments, write)
    catalog.register("updateEnvironmentTags", update_environment_tags, write)
    catalog.register("updateEnvironmentUserAccesses", update_environment_user_accesses, write)
    catalog.register("updateEnvironmentTeamAccesses", update_environment_team_accesses, write)
    catalog.register("listEnvironmentGroups", list_environment_groups, read)
    catalog.register("createEnvironmentGroup", create_environment_group, write)
    catalog.register("updateEnvironmentGroupName", update_environment_group_name, write)
    catalog.register(
        "updateEnvironmentGroupEnvironments", update_environment_group_environments, write
    )
    catalog.register("updateEnvironmentGroupTags", update_environment_group_tags, write)
    catalog.register("listEnvironmentTags", list_environment_tags, read)
    catalog.register("createEnvironmentTag", create_environment_tag, write)
    catalog.register("deleteEnvironmentTag", delete_environment_tag, write)
