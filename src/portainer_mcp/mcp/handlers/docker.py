"""Docker environment operations: dashboard and raw Docker Engine API proxy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.client.api import ProxyRequest
from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import (
    parse_key_value_map,
    validate_api_path,
    validate_http_method,
)

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


def parse_proxy_request(
    params: ParameterParser, path_parameter: str, method: str = ""
) -> ProxyRequest:
    """Build a :class:`ProxyRequest` from the shared proxy arguments.

    When *method* is given the ``method`` argument is not read.
    """
    if not method:
        method = validate_http_method(params.get_string("method", required=True))
    path = validate_api_path(path_parameter, params.get_string(path_parameter, required=True))
    query_params = parse_key_value_map(params.get_object_array("queryParams"), "query params")
    headers = parse_key_value_map(params.get_object_array("headers"), "headers")
    body = params.get_string("body")
    return ProxyRequest(
        method=method,
        path=path,
        query_params=query_params,
        headers=headers,
        body=body or None,
    )


async def get_docker_dashboard(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    with backend_call("failed to get docker dashboard"):
        dashboard = await client.get_docker_dashboard(environment_id)
    return json_result(dashboard, "failed to marshal docker dashboard")


async def docker_proxy(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    request = parse_proxy_request(params, "dockerAPIPath")
    with backend_call("failed to send Docker API request"):
        response = await client.proxy_docker_request(environment_id, request)
    return text_result(response.text)


def register_docker_operations(catalog: OperationCatalog) -> None:
    catalog.register("getDockerDashboard", get_docker_dashboard, Permission.READ_ONLY_SAFE)
    catalog.register("dockerProxy", docker_proxy, Permission.WRITE_REQUIRED)
