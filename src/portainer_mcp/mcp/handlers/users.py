"""User and team operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import validate_name, validate_user_role

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


async def list_users(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get users"):
        users = await client.list_users()
    return json_result(users, "failed to marshal users")


async def get_user(client: PortainerClient, params: ParameterParser) -> ToolResult:
    user_id = params.get_id()
    with backend_call("failed to get user"):
        user = await client.get_user(user_id)
    return json_result(user, "failed to marshal user")


async def create_user(client: PortainerClient, params: ParameterParser) -> ToolResult:
    username = validate_name(params.get_string("username", required=True), "username")
    password = params.get_string("password", required=True)
    role = validate_user_role(params.get_string("role", required=True))
    with backend_call("failed to create user"):
        user_id = await client.create_user(username, password, role)
    return text_result(f"User created successfully with ID: {user_id}")


async def delete_user(client: PortainerClient, params: ParameterParser) -> ToolResult:
    user_id = params.get_id()
    with backend_call("failed to delete user"):
        await client.delete_user(user_id)
    return text_result("User deleted successfully")


async def update_user_role(client: PortainerClient, params: ParameterParser) -> ToolResult:
    user_id = params.get_id()
    role = validate_user_role(params.get_string("role", required=True))
    with backend_call("failed to update user role"):
        await client.update_user_role(user_id, role)
    return text_result("User updated successfully")


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------


async def list_teams(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get teams"):
        teams = await client.list_teams()
    return json_result(teams, "failed to marshal teams")


async def get_team(client: PortainerClient, params: ParameterParser) -> ToolResult:
    team_id = params.get_id()
    with backend_call("failed to get team"):
        team = await client.get_team(team_id)
    return json_result(team, "failed to marshal team")


async def create_team(client: PortainerClient, params: ParameterParser) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    with backend_call("failed to create team"):
        team_id = await client.create_team(name)
    return text_result(f"Team created successfully with ID: {team_id}")


async def delete_team(client: PortainerClient, params: ParameterParser) -> ToolResult:
    team_id = params.get_id()
    with backend_call("failed to delete team"):
        await client.delete_team(team_id)
    return text_result("Team deleted successfully")


async def update_team_name(client: PortainerClient, params: ParameterParser) -> ToolResult:
    team_id = params.get_id()
    name = validate_name(params.get_string("name", required=True))
    with backend_call("failed to update team name"):
        await client.update_team_name(team_id, name)
    return text_result("Team name updated successfully")


async def update_team_members(client: PortainerClient, params: ParameterParser) -> ToolResult:
    team_id = params.get_id()
    user_ids = params.get_int_array("userIds", required=True)
    with backend_call("failed to update team members"):
        await client.update_team_members(team_id, user_ids)
    return text_result("Team members updated successfully")


def register_user_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listUsers", list_users, read)
    catalog.register("getUser", get_user, read)
    catalog.register("createUser", create_user, write)
    catalog.register("deleteUser", delete_user, write)
    catalog.register("updateUserRole", update_user_role, write)


def register_team_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listTeams", list_teams, read)
    catalog.register("getTeam", get_team, read)
    catalog.register("createTeam", create_team, write)
    catalog.register("deleteTeam", delete_team, write)
    catalog.register("updateTeamName", update_team_name, write)
    catalog.register("updateTeamMembers", update_team_members, write)
