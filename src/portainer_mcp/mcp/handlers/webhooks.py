"""Webhook operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import WEBHOOK_TYPES, validate_int_choice

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def list_webhooks(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get webhooks"):
        webhooks = await client.list_webhooks()
    return json_result(webhooks, "failed to marshal webhooks")


async def create_webhook(client: PortainerClient, params: ParameterParser) -> ToolResult:
    resource_id = params.get_string("resourceId", required=True)
    endpoint_id = params.get_id("endpointId")
    webhook_type = validate_int_choice(
        "webhookType",
        params.get_int("webhookType", required=True),
        WEBHOOK_TYPES,
        "must be 1=service or 2=container",
    )
    with backend_call("failed to create webhook"):
        webhook_id = await client.create_webhook(resource_id, endpoint_id, webhook_type)
    return text_result(f"Webhook created successfully with ID: {webhook_id}")


async def delete_webhook(client: PortainerClient, params: ParameterParser) -> ToolResult:
    webhook_id = params.get_id()
    with backend_call("failed to delete webhook"):
        await client.delete_webhook(webhook_id)
    return text_result("Webhook deleted successfully")


def register_webhook_operations(catalog: OperationCatalog) -> None:
    catalog.register("listWebhooks", list_webhooks, Permission.READ_ONLY_SAFE)
    catalog.register("createWebhook", create_webhook, Permission.WRITE_REQUIRED)
    catalog.register("deleteWebhook", delete_webhook, Permission.WRITE_REQUIRED)
