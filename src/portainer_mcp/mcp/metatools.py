"""Meta-tool registry: coarse tools that bundle operations behind an ``action``.

Each meta-tool maps snake_case action names onto catalog operations. Which
actions a meta-tool exposes is decided once, from the permission mode and the
operations the catalog and schema actually provide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mcp.types import ToolAnnotations

if TYPE_CHECKING:
    from collections.abc import Collection


@dataclass(frozen=True, slots=True)
class MetaAction:
    name: str
    operation: str


@dataclass(frozen=True, slots=True)
class MetaTool:
    name: str
    title: str
    summary: str
    actions: tuple[MetaAction, ...]
    destructive: bool = True
    idempotent: bool = False
    open_world: bool = False

    def description(self, action_names: Collection[str] | None = None) -> str:
        names = action_names if action_names is not None else self.action_names()
        return f"{self.summary} Actions: {', '.join(names)}. Set 'action' parameter to choose."

    def action_names(self) -> list[str]:
        return [action.name for action in self.actions]

    def find(self, action_name: str) -> MetaAction | None:
        for action in self.actions:
            if action.name == action_name:
                return action
        return None

    def annotations(self, read_only: bool) -> ToolAnnotations:
        return ToolAnnotations(
            title=self.title,
            readOnlyHint=read_only,
            destructiveHint=self.destructive and not read_only,
            idempotentHint=self.idempotent,
            openWorldHint=self.open_world,
        )


def _actions(*pairs: tuple[str, str]) -> tuple[MetaAction, ...]:
    return tuple(MetaAction(name=name, operation=operation) for name, operation in pairs)


META_TOOLS: tuple[MetaTool, ...] = (
    MetaTool(
        name="manage_environments",
        title="Manage Environments",
        summary="Manage Portainer environments, environment groups, and tags.",
        actions=_actions(
            ("list_environments", "listEnvironments"),
            ("get_environment", "getEnvironment"),
            ("delete_environment", "deleteEnvironment"),
            ("snapshot_environment", "snapshotEnvironment"),
            ("snapshot_all_environments", "snapshotAllEnvironments"),
            ("update_environment_tags", "updateEnvironmentTags"),
            ("update_environment_user_accesses", "updateEnvironmentUserAccesses"),
            ("update_environment_team_accesses", "updateEnvironmentTeamAccesses"),
            ("list_environment_groups", "listEnvironmentGroups"),
            ("create_environment_group", "createEnvironmentGroup"),
            ("update_environment_group_name", "updateEnvironmentGroupName"),
            ("update_environment_group_environments", "updateEnvironmentGroupEnvironments"),
            ("update_environment_group_tags", "updateEnvironmentGroupTags"),
            ("list_environment_tags", "listEnvironmentTags"),
            ("create_environment_tag", "createEnvironmentTag"),
            ("delete_environment_tag", "deleteEnvironmentTag"),
        ),
    ),
    MetaTool(
        name="manage_stacks",
        title="Manage Stacks",
        summary="Manage Docker stacks (Compose and Edge deployments).",
        actions=_actions(
            ("list_stacks", "listStacks"),
            ("list_regular_stacks", "listRegularStacks"),
            ("get_stack", "getStack"),
            ("get_stack_file", "getStackFile"),
            ("inspect_stack_file", "inspectStackFile"),
            ("create_stack", "createStack"),
            ("update_stack", "updateStack"),
            ("delete_stack", "deleteStack"),
            ("update_stack_git", "updateStackGit"),
            ("redeploy_stack_git", "redeployStackGit"),
            ("start_stack", "startStack"),
            ("stop_stack", "stopStack"),
            ("migrate_stack", "migrateStack"),
        ),
    ),
    MetaTool(
        name="manage_access_groups",
        title="Manage Access Groups",
        summary="Manage access groups for environment-level permissions.",
        actions=_actions(
            ("list_access_groups", "listAccessGroups"),
            ("create_access_group", "createAccessGroup"),
            ("update_access_group_name", "updateAccessGroupName"),
            ("update_access_group_user_accesses", "updateAccessGroupUserAccesses"),
            ("update_access_group_team_accesses", "updateAccessGroupTeamAccesses"),
            ("add_environment_to_access_group", "addEnvironmentToAccessGroup"),
            ("remove_environment_from_access_group", "removeEnvironmentFromAccessGroup"),
        ),
    ),
    MetaTool(
        name="manage_users",
        title="Manage Users",
        summary="Manage Portainer user accounts and roles.",
        actions=_actions(
            ("list_users", "listUsers"),
            ("get_user", "getUser"),
            ("create_user", "createUser"),
            ("delete_user", "deleteUser"),
            ("update_user_role", "updateUserRole"),
        ),
    ),
    MetaTool(
        name="manage_teams",
        title="Manage Teams",
        summary="Manage Portainer teams and membership.",
        actions=_actions(
            ("list_teams", "listTeams"),
            ("get_team", "getTeam"),
            ("create_team", "createTeam"),
            ("delete_team", "deleteTeam"),
            ("update_team_name", "updateTeamName"),
            ("update_team_members", "updateTeamMembers"),
        ),
    ),
    MetaTool(
        name="manage_docker",
        title="Manage Docker",
        summary="Interact with Docker environments via dashboards and proxy API calls.",
        actions=_actions(
            ("get_docker_dashboard", "getDockerDashboard"),
            ("docker_proxy", "dockerProxy"),
        ),
        open_world=True,
    ),
    MetaTool(
        name="manage_kubernetes",
        title="Manage Kubernetes",
        summary=(
            "Interact with Kubernetes environments via dashboards, namespaces, "
            "kubeconfig, and proxy API calls."
        ),
        actions=_actions(
            ("get_kubernetes_resource_stripped", "getKubernetesResourceStripped"),
            ("get_kubernetes_dashboard", "getKubernetesDashboard"),
            ("list_kubernetes_namespaces", "listKubernetesNamespaces"),
            ("get_kubernetes_config", "getKubernetesConfig"),
            ("kubernetes_proxy", "kubernetesProxy"),
        ),
        open_world=True,
    ),
    MetaTool(
        name="manage_helm",
        title="Manage Helm",
        summary="Manage Helm repositories, charts, and releases on Kubernetes environments.",
        actions=_actions(
            ("list_helm_repositories", "listHelmRepositories"),
            ("search_helm_charts", "searchHelmCharts"),
            ("list_helm_releases", "listHelmReleases"),
            ("get_helm_release_history", "getHelmReleaseHistory"),
            ("add_helm_repository", "addHelmRepository"),
            ("remove_helm_repository", "removeHelmRepository"),
            ("install_helm_chart", "installHelmChart"),
            ("delete_helm_release", "deleteHelmRelease"),
        ),
    ),
    MetaTool(
        name="manage_registries",
        title="Manage Registries",
        summary="Manage container registries (Quay, Azure, DockerHub, GitLab, ECR, custom).",
        actions=_actions(
            ("list_registries", "listRegistries"),
            ("get_registry", "getRegistry"),
            ("create_registry", "createRegistry"),
            ("update_registry", "updateRegistry"),
            ("delete_registry", "deleteRegistry"),
        ),
    ),
    MetaTool(
        name="manage_templates",
        title="Manage Templates",
        summary="Manage custom and application templates for stack deployment.",
        actions=_actions(
            ("list_custom_templates", "listCustomTemplates"),
            ("get_custom_template", "getCustomTemplate"),
            ("get_custom_template_file", "getCustomTemplateFile"),
            ("create_custom_template", "createCustomTemplate"),
            ("delete_custom_template", "deleteCustomTemplate"),
            ("list_app_templates", "listAppTemplates"),
            ("get_app_template_file", "getAppTemplateFile"),
        ),
    ),
    MetaTool(
        name="manage_backups",
        title="Manage Backups",
        summary="Manage Portainer server backups and restore (local and S3).",
        actions=_actions(
            ("get_backup_status", "getBackupStatus"),
            ("get_backup_s3_settings", "getBackupS3Settings"),
            ("create_backup", "createBackup"),
            ("backup_to_s3", "backupToS3"),
            ("restore_from_s3", "restoreFromS3"),
        ),
    ),
    MetaTool(
        name="manage_webhooks",
        title="Manage Webhooks",
        summary="Manage webhooks for container services and automated deployments.",
        actions=_actions(
            ("list_webhooks", "listWebhooks"),
            ("create_webhook", "createWebhook"),
            ("delete_webhook", "deleteWebhook"),
        ),
    ),
    MetaTool(
        name="manage_edge",
        title="Manage Edge",
        summary="Manage Edge compute jobs and update schedules for remote environments.",
        actions=_actions(
            ("list_edge_jobs", "listEdgeJobs"),
            ("get_edge_job", "getEdgeJob"),
            ("get_edge_job_file", "getEdgeJobFile"),
            ("create_edge_job", "createEdgeJob"),
            ("delete_edge_job", "deleteEdgeJob"),
            ("list_edge_update_schedules", "listEdgeUpdateSchedules"),
        ),
    ),
    MetaTool(
        name="manage_settings",
        title="Manage Settings",
        summary="Manage Portainer server settings, public settings, and SSL configuration.",
        actions=_actions(
            ("get_settings", "getSettings"),
            ("get_public_settings", "getPublicSettings"),
            ("update_settings", "updateSettings"),
            ("get_ssl_settings", "getSSLSettings"),
            ("update_ssl_settings", "updateSSLSettings"),
        ),
        destructive=False,
        idempotent=True,
    ),
    MetaTool(
        name="manage_system",
        title="Manage System",
        summary="Portainer system info, roles, MOTD, and authentication.",
        actions=_actions(
            ("get_system_status", "getSystemStatus"),
            ("list_roles", "listRoles"),
            ("get_motd", "getMOTD"),
            ("authenticate", "authenticate"),
            ("logout", "logout"),
        ),
        destructive=False,
    ),
)


def get_meta_tool(name: str) -> MetaTool | None:
    for meta_tool in META_TOOLS:
        if meta_tool.name == name:
            return meta_tool
    return None
