"""Per-domain operation handlers and the catalog builder."""

from __future__ import annotations

from portainer_mcp.mcp.catalog import OperationCatalog
from portainer_mcp.mcp.handlers.access_groups import register_access_group_operations
from portainer_mcp.mcp.handlers.backups import register_backup_operations
from portainer_mcp.mcp.handlers.docker import register_docker_operations
from portainer_mcp.mcp.handlers.edge import register_edge_operations
from portainer_mcp.mcp.handlers.environments import register_environment_operations
from portainer_mcp.mcp.handlers.helm import register_helm_operations
from portainer_mcp.mcp.handlers.kubernetes import register_kubernetes_operations
from portainer_mcp.mcp.handlers.registries import register_registry_operations
from portainer_mcp.mcp.handlers.settings import register_settings_operations
from portainer_mcp.mcp.handlers.stacks import register_stack_operations
from portainer_mcp.mcp.handlers.system import register_system_operations
from portainer_mcp.mcp.handlers.templates import register_template_operations
from portainer_mcp.mcp.handlers.users import register_team_operations, register_user_operations
from portainer_mcp.mcp.handlers.webhooks import register_webhook_operations

_REGISTRARS = (
    register_environment_operations,
    register_stack_operations,
    register_access_group_operations,
    register_user_operations,
    register_team_operations,
    register_docker_operations,
    register_kubernetes_operations,
    register_helm_operations,
    register_registry_operations,
    register_template_operations,
    register_backup_operations,
    register_webhook_operations,
    register_edge_operations,
    register_settings_operations,
    register_system_operations,
)


def build_catalog() -> OperationCatalog:
    """Register every backend operation and freeze the result."""
    catalog = OperationCatalog()
    for register in _REGISTRARS:
        register(catalog)
    return catalog.freeze()


__all__ = ["build_catalog"]
