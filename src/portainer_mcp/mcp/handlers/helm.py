"""Helm repository, chart and release operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.parameters import validate_name, validate_url

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


async def list_helm_repositories(client: PortainerClient, params: ParameterParser) -> ToolResult:
    user_id = params.get_id("userId")
    with backend_call("failed to list helm repositories"):
        repositories = await client.list_helm_repositories(user_id)
    return json_result(repositories, "failed to marshal helm repositories")


async def add_helm_repository(client: PortainerClient, params: ParameterParser) -> ToolResult:
    user_id = params.get_id("userId")
    url = validate_url("url", params.get_string("url", required=True))
    with backend_call("failed to add helm repository"):
        repository = await client.add_helm_repository(user_id, url)
    return json_result(repository, "failed to marshal helm repository")


async def remove_helm_repository(client: PortainerClient, params: ParameterParser) -> ToolResult:
    user_id = params.get_id("userId")
    repository_id = params.get_id("repositoryId")
    with backend_call("failed to remove helm repository"):
        await client.remove_helm_repository(user_id, repository_id)
    return text_result("Helm repository removed successfully")


async def search_helm_charts(client: PortainerClient, params: ParameterParser) -> ToolResult:
    repo = params.get_string("repo", required=True)
    chart = params.get_string("chart")
    with backend_call("failed to search helm charts"):
        result = await client.search_helm_charts(repo, chart)
    return text_result(result)


async def install_helm_chart(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    chart = params.get_string("chart", required=True)
    name = validate_name(params.get_string("name", required=True))
    repo = params.get_string("repo", required=True)
    namespace = params.get_string("namespace")
    values = params.get_string("values")
    version = params.get_string("version")
    with backend_call("failed to install helm chart"):
        release = await client.install_helm_chart(
            environment_id,
            chart=chart,
            name=name,
            repo=repo,
            namespace=namespace,
            values=values,
            version=version,
        )
    result = json_result(release, "failed to marshal helm release")
    if result.is_error:
        return result
    return text_result(f"Helm chart installed successfully: {result.text}")


async def list_helm_releases(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    namespace = params.get_string("namespace")
    name_filter = params.get_string("filter")
    selector = params.get_string("selector")
    with backend_call("failed to list helm releases"):
        releases = await client.list_helm_releases(
            environment_id, namespace=namespace, filter=name_filter, selector=selector
        )
    return json_result(releases, "failed to marshal helm releases")


async def delete_helm_release(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    release = params.get_string("release", required=True)
    namespace = params.get_string("namespace")
    with backend_call("failed to delete helm release"):
        await client.delete_helm_release(environment_id, release, namespace)
    return text_result("Helm release deleted successfully")


async def get_helm_release_history(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    environment_id = params.get_id("environmentId")
    name = params.get_string("name", required=True)
    namespace = params.get_string("namespace")
    with backend_call("failed to get helm release history"):
        history = await client.get_helm_release_history(environment_id, name, namespace)
    return json_result(history, "failed to marshal helm release history")


def register_helm_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("listHelmRepositories", list_helm_repositories, read)
    catalog.register("searchHelmCharts", search_helm_charts, read)
    catalog.register("listHelmReleases", list_helm_releases, read)
    catalog.register("getHelmReleaseHistory", get_helm_release_history, read)
    catalog.register("addHelmRepository", add_helm_repository, write)
    catalog.register("removeHelmRepository", remove_helm_repository, write)
    catalog.register("installHelmChart", install_helm_chart, write)
    catalog.register("deleteHelmRelease", delete_helm_release, write)
