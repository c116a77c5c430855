"""Custom template and application template operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import (
    TEMPLATE_PLATFORMS,
    TEMPLATE_TYPES,
    validate_int_choice,
    validate_name,
)

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def list_custom_templates(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to list custom templates"):
        templates = await client.list_custom_templates()
    return json_result(templates, "failed to marshal custom templates")


async def get_custom_template(client: PortainerClient, params: ParameterParser) -> ToolResult:
    template_id = params.get_id()
    with backend_call("failed to get custom template"):
        template = await client.get_custom_template(template_id)
    return json_result(template, "failed to marshal custom template")


async def get_custom_template_file(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    template_id = params.get_id()
    with backend_call("failed to get custom template file"):
        content = await client.get_custom_template_file(template_id)
    return text_result(content)


async def create_custom_template(client: PortainerClient, params: ParameterParser) -> ToolResult:
    title = validate_name(params.get_string("title", required=True), "title")
    description = params.get_string("description", required=True)
    file_content = params.get_string("fileContent", required=True)
    template_type = validate_int_choice(
        "type",
        params.get_int("type", required=True),
        TEMPLATE_TYPES,
        "must be 1=Swarm, 2=Compose, 3=Kubernetes",
    )
    platform = validate_int_choice(
        "platform",
        params.get_int("platform", required=True),
        TEMPLATE_PLATFORMS,
        "must be 1=Linux, 2=Windows",
    )
    with backend_call("failed to create custom template"):
        template_id = await client.create_custom_template(
            title=title,
            description=description,
            note=params.get_string("note"),
            logo=params.get_string("logo"),
            file_content=file_content,
            platform=platform,
            template_type=template_type,
        )
    return text_result(f"Custom template created successfully with ID: {template_id}")


async def delete_custom_template(client: PortainerClient, params: ParameterParser) -> ToolResult:
    template_id = params.get_id()
    with backend_call("failed to delete custom template"):
        await client.delete_custom_template(template_id)
    return text_result("Custom template deleted successfully")


async def list_app_templates(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to list app templates"):
        templates = await client.list_app_templates()
    return json_result(templates, "failed to marshal app templates")


async def get_app_template_file(client: PortainerClient, params: ParameterParser) -> ToolResult:
    template_id = params.get_id()
    with backend_call(f"failed to get app template file for template {template_id}"):
        content = await client.get_app_template_file(template_id)
    return text_result(content)


def register_template_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listCustomTemplates", list_custom_templates, read)
    catalog.register("getCustomTemplate", get_custom_template, read)
    catalog.register("getCustomTemplateFile", get_custom_template_file, read)
    catalog.register("createCustomTemplate", create_custom_template, write)
    catalog.register("deleteCustomTemplate", delete_custom_template, write)
    catalog.register("listAppTemplates", list_app_templates, read)
    catalog.register("getAppTemplateFile", get_app_template_file, read)
