"""Edge compute operations: edge jobs and edge update schedules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import validate_cron_expression, validate_name

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def list_edge_jobs(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to list edge jobs"):
        jobs = await client.list_edge_jobs()
    return json_result(jobs, "failed to marshal edge jobs")


async def get_edge_job(client: PortainerClient, params: ParameterParser) -> ToolResult:
    job_id = params.get_id()
    with backend_call("failed to get edge job"):
        job = await client.get_edge_job(job_id)
    return json_result(job, "failed to marshal edge job")


async def get_edge_job_file(client: PortainerClient, params: ParameterParser) -> ToolResult:
    job_id = params.get_id()
    with backend_call("failed to get edge job file"):
        content = await client.get_edge_job_file(job_id)
    return text_result(content)


async def create_edge_job(client: PortainerClient, params: ParameterParser) -> ToolResult:
    name = validate_name(params.get_string("name", required=True))
    cron_expression = validate_cron_expression(
        params.get_string("cronExpression", required=True)
    )
    file_content = params.get_string("fileContent", required=True)
    with backend_call("failed to create edge job"):
        job_id = await client.create_edge_job(
            name=name,
            cron_expression=cron_expression,
            file_content=file_content,
            recurring=params.get_bool("recurring"),
            endpoints=params.get_int_array("endpoints"),
            edge_groups=params.get_int_array("edgeGroups"),
        )
    return text_result(f"Edge job created successfully with ID: {job_id}")


async def delete_edge_job(client: PortainerClient, params: ParameterParser) -> ToolResult:
    job_id = params.get_id()
    with backend_call("failed to delete edge job"):
        await client.delete_edge_job(job_id)
    return text_result("Edge job deleted successfully")


async def list_edge_update_schedules(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    with backend_call("failed to list edge update schedules"):
        schedules = await client.list_edge_update_schedules()
    return json_result(schedules, "failed to marshal edge update schedules")


def register_edge_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listEdgeJobs", list_edge_jobs, read)
    catalog.register("getEdgeJob", get_edge_job, read)
    catalog.register("getEdgeJobFile", get_edge_job_file, read)
    catalog.register("createEdgeJob", create_edge_job, write)
    catalog.register("deleteEdgeJob", delete_edge_job, write)
    catalog.register("listEdgeUpdateSchedules", list_edge_update_schedules, read)
