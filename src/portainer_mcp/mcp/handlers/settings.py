"""Server settings and SSL configuration operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import parse_json_object

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def get_settings(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get settings"):
        settings = await client.get_settings()
    return json_result(settings, "failed to marshal settings")


async def get_public_settings(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get public settings"):
        settings = await client.get_public_settings()
    return json_result(settings, "failed to marshal public settings")


async def update_settings(client: PortainerClient, params: ParameterParser) -> ToolResult:
    settings = parse_json_object("settings", params.get_string("settings", required=True))
    with backend_call("failed to update settings"):
        await client.update_settings(settings)
    return text_result("Settings updated successfully")


async def get_ssl_settings(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get SSL settings"):
        settings = await client.get_ssl_settings()
    return json_result(settings, "failed to marshal SSL settings")


async def update_ssl_settings(client: PortainerClient, params: ParameterParser) -> ToolResult:
    # Absent fields are omitted from the request.
    cert = params.get_string("cert") if params.has("cert") else None
    key = params.get_string("key") if params.has("key") else None
    http_enabled = params.get_bool("httpEnabled") if params.has("httpEnabled") else None
    with backend_call("failed to update SSL settings"):
        await client.update_ssl_settings(cert, key, http_enabled)
    return text_result("SSL settings updated successfully")


def register_settings_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("getSettings", get_settings, read)
    catalog.register("getPublicSettings", get_public_settings, read)
    catalog.register("updateSettings", update_settings, write)
    catalog.register("getSSLSettings", get_ssl_settings, read)
    catalog.register("updateSSLSettings", update_ssl_settings, write)
