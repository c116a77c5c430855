"""Kubernetes environment operations."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result
from portainer_mcp.mcp.handlers.docker import parse_proxy_request

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser

LAST_APPLIED_ANNOTATION: Final = "kubectl.kubernetes.io/last-applied-configuration"


def _strip_object(resource: Any) -> None:
    if not isinstance(resource, dict):
        return
    metadata = resource.get("metadata")
    if not isinstance(metadata, dict):
        return
    metadata.pop("managedFields", None)
    annotations = metadata.get("annotations")
    if isinstance(annotations, dict):
        annotations.pop(LAST_APPLIED_ANNOTATION, None)


def strip_resource(document: Any) -> Any:
    """Drop bulky server-side bookkeeping from an object or a ``*List`` response, in place."""
    _strip_object(document)
    if isinstance(document, dict) and isinstance(document.get("items"), list):
        for item in document["items"]:
            _strip_object(item)
    return document


async def get_kubernetes_resource_stripped(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    environment_id = params.get_id("environmentId")
    request = parse_proxy_request(params, "kubernetesAPIPath", method="GET")
    with backend_call("failed to send Kubernetes API request"):
        response = await client.proxy_kubernetes_request(environment_id, request)
    try:
        document = json.loads(response.body)
    except ValueError:
        # Truncated or non-JSON bodies are passed through untouched.
        return text_result(response.text)
    return json_result(strip_resource(document), "failed to marshal Kubernetes resource")


async def kubernetes_proxy(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    request = parse_proxy_request(params, "kubernetesAPIPath")
    with backend_call("failed to send Kubernetes API request"):
        response = await client.proxy_kubernetes_request(environment_id, request)
    return text_result(response.text)


async def get_kubernetes_dashboard(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    environment_id = params.get_id("environmentId")
    with backend_call("failed to get kubernetes dashboard"):
        dashboard = await client.get_kubernetes_dashboard(environment_id)
    return json_result(dashboard, "failed to marshal kubernetes dashboard")


async def list_kubernetes_namespaces(
    client: PortainerClient, params: ParameterParser
) -> ToolResult:
    environment_id = params.get_id("environmentId")
    with backend_call("failed to get kubernetes namespaces"):
        namespaces = await client.list_kubernetes_namespaces(environment_id)
    return json_result(namespaces, "failed to marshal kubernetes namespaces")


async def get_kubernetes_config(client: PortainerClient, params: ParameterParser) -> ToolResult:
    environment_id = params.get_id("environmentId")
    with backend_call("failed to get kubernetes config"):
        config = await client.get_kubernetes_config(environment_id)
    return json_result(config, "failed to marshal kubernetes config")


def register_kubernetes_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("getKubernetesResourceStripped", get_kubernetes_resource_stripped, read)
    catalog.register("getKubernetesDashboard", get_kubernetes_dashboard, read)
    catalog.register("listKubernetesNamespaces", list_kubernetes_namespaces, read)
    catalog.register("getKubernetesConfig", get_kubernetes_config, read)
    catalog.register("kubernetesProxy", kubernetes_proxy, write)
