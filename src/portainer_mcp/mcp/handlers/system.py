"""System status, roles, message of the day and authentication."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def get_system_status(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get system status"):
        status = await client.get_system_status()
    return json_result(status, "failed to marshal system status")


async def list_roles(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to list roles"):
        roles = await client.list_roles()
    return json_result(roles, "failed to marshal roles")


async def get_motd(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get MOTD"):
        motd = await client.get_motd()
    return json_result(motd, "failed to marshal MOTD")


async def authenticate(client: PortainerClient, params: ParameterParser) -> ToolResult:
    username = params.get_string("username", required=True)
    password = params.get_string("password", required=True)
    with backend_call("failed to authenticate user"):
        response = await client.authenticate(username, password)
    return json_result(response, "failed to marshal authentication response")


async def logout(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to logout"):
        await client.logout()
    return text_result("Logged out successfully")


def register_system_operations(catalog: OperationCatalog) -> None:
    read = Permission.READ_ONLY_SAFE
    catalog.register("getSystemStatus", get_system_status, read)
    catalog.register("listRoles", list_roles, read)
    catalog.register("getMOTD", get_motd, read)
    catalog.register("authenticate", authenticate, read)
    catalog.register("logout", logout, Permission.WRITE_REQUIRED)
