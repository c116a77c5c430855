"""Edge stack and regular (compose/swarm) stack operations.

``listStacks``, ``getStackFile``, ``createStack`` and ``updateStack`` act on
edge stacks; the remaining operations act on regular stacks deployed to a
single environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import validate_compose_file, validate_name

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def list_stacks(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get stacks"):
        stacks = await client.list_edge_stacks()
    return json_result(stacks, "failed to marshal stacks")


async def list_regular_stacks(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to list regular stacks"):
        stacks = await client.list_regular_stacks()
    return json_result(stacks, "failed to marshal regular stacks")


async def get_stack_file(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    with backend_call("failed to get stack file"):
        content = await client.get_edge_stack_file(stack_id)
    return text_result(content)


async def create_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    file_content = validate_compose_file(params.get_string("file", required=True))
    group_ids = params.get_int_array("environmentGroupIds", required=True)
    with backend_call("error creating stack"):
        stack_id = await client.create_edge_stack(name, file_content, group_ids)
    return text_result(f"Stack created successfully with ID: {stack_id}")


async def update_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    file_content = validate_compose_file(params.get_string("file", required=True))
    group_ids = params.get_int_array("environmentGroupIds", required=True)
    with backend_call("failed to update stack"):
        await client.update_edge_stack(stack_id, file_content, group_ids)
    return text_result("Stack updated successfully")


async def get_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    with backend_call("failed to inspect stack"):
        stack = await client.get_stack(stack_id)
    return json_result(stack, "failed to marshal stack")


async def inspect_stack_file(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    with backend_call("failed to inspect stack file"):
        content = await client.get_stack_file(stack_id)
    return text_result(content)


async def delete_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    environment_id = params.get_id("environmentId")
    remove_volumes = params.get_bool("removeVolumes")
    with backend_call("failed to delete stack"):
        await client.delete_stack(stack_id, environment_id, remove_volumes)
    return text_result("Stack deleted successfully")


async def update_stack_git(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    environment_id = params.get_id("environmentId")
    reference_name = params.get_string("referenceName")
    prune = params.get_bool("prune")
    with backend_call("failed to update stack git"):
        stack = await client.update_stack_git(stack_id, environment_id, reference_name, prune)
    return json_result(stack, "failed to marshal stack")


async def redeploy_stack_git(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    environment_id = params.get_id("environmentId")
    pull_image = params.get_bool("pullImage")
    prune = params.get_bool("prune")
    with backend_call("failed to redeploy stack"):
        stack = await client.redeploy_stack_git(stack_id, environment_id, pull_image, prune)
    return json_result(stack, "failed to marshal stack")


async def start_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    environment_id = params.get_id("environmentId")
    with backend_call("failed to start stack"):
        stack = await client.start_stack(stack_id, environment_id)
    return json_result(stack, "failed to marshal stack")


async def stop_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    environment_id = params.get_id("environmentId")
    with backend_call("failed to stop stack"):
        stack = await client.stop_stack(stack_id, environment_id)
    return json_result(stack, "failed to marshal stack")


async def migrate_stack(client: PortainerClient, params: ParameterParser) -> ToolResult:
    stack_id = params.get_id()
    environment_id = params.get_id("environmentId")
    target_environment_id = params.get_id("targetEnvironmentId")
    name = params.get_string("name")
    with backend_call("failed to migrate stack"):
        stack = await client.migrate_stack(stack_id, environment_id, target_environment_id, name)
    return json_result(stack, "failed to marshal stack")


def register_stack_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listStacks", list_stacks, read)
    catalog.register("listRegularStacks", list_regular_stacks, read)
    catalog.register("getStack", get_stack, read)
    catalog.register("getStackFile", get_stack_file, read)
    catalog.register("inspectStackFile", inspect_stack_file, read)
    catalog.register("createStack", create_stack, write)
    catalog.register("updateStack", update_stack, write)
    catalog.register("deleteStack", delete_stack, write)
    catalog.register("updateStackGit", update_stack_git, write)
    catalog.register("redeployStackGit", redeploy_stack_git, write)
    catalog.register("startStack", start_stack, write)
    catalog.register("stopStack", stop_stack, write)
    catalog.register("migrateStack", migrate_stack, write)
