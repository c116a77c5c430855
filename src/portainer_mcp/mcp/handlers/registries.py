"""Container registry operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import REGISTRY_TYPES, validate_int_choice, validate_name

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser

_REGISTRY_TYPE_HINT = "must be 1=Quay, 2=Azure, 3=Custom, 4=GitLab, 5=ProGet, 6=DockerHub, 7=ECR"

# Tool argument -> Portainer field, for the optional string fields of an update.
_UPDATE_STRING_FIELDS = {
    "url": "URL",
    "username": "Username",
    "password": "Password",
    "baseURL": "BaseURL",
}


async def list_registries(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to list registries"):
        registries = await client.list_registries()
    return json_result(registries, "failed to marshal registries")


async def get_registry(client: PortainerClient, params: ParameterParser) -> ToolResult:
    registry_id = params.get_id()
    with backend_call("failed to get registry"):
        registry = await client.get_registry(registry_id)
    return json_result(registry, "failed to marshal registry")


async def create_registry(client: PortainerClient, params: ParameterParser) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    registry_type = validate_int_choice(
        "type", params.get_int("type", required=True), REGISTRY_TYPES, _REGISTRY_TYPE_HINT
    )
    url = params.get_string("url", required=True)
    authentication = params.get_bool("authentication", required=True)
    with backend_call("failed to create registry"):
        registry_id = await client.create_registry(
            name=name,
            registry_type=registry_type,
            url=url,
            authentication=authentication,
            username=params.get_string("username"),
            password=params.get_string("password"),
            base_url=params.get_string("baseURL"),
        )
    return text_result(f"Registry created successfully with ID: {registry_id}")


async def update_registry(client: PortainerClient, params: ParameterParser) -> ToolResult:
    registry_id = params.get_id()
    changes: dict[str, Any] = {}
    if params.has("name"):
        changes["Name"] = validate_name(params.get_string("name"))
    if params.has("authentication"):
        changes["Authentication"] = params.get_bool("authentication")
    for argument, field in _UPDATE_STRING_FIELDS.items():
        if params.has(argument):
            changes[field] = params.get_string(argument)
    with backend_call("failed to update registry"):
        await client.update_registry(registry_id, changes)
    return text_result("Registry updated successfully")


async def delete_registry(client: PortainerClient, params: ParameterParser) -> ToolResult:
    registry_id = params.get_id()
    with backend_call("failed to delete registry"):
        await client.delete_registry(registry_id)
    return text_result("Registry deleted successfully")


def register_registry_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listRegistries", list_registries, read)
    catalog.register("getRegistry", get_registry, read)
    catalog.register("createRegistry", create_registry, write)
    catalog.register("updateRegistry", update_registry, write)
    catalog.register("deleteRegistry", delete_registry, write)
