"""Simplified result models built from raw Portainer API payloads.

Portainer returns large, PascalCase documents whose shape drifts between
releases. Each model keeps only what an agent needs and exposes a
``from_raw`` constructor tolerant of missing keys.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Enumerations shared with argument validation
# ---------------------------------------------------------------------------


class AccessLevel(StrEnum):
    """Permission tier of a user or team on an environment or access group."""

    ENVIRONMENT_ADMINISTRATOR = "environment_administrator"
    HELPDESK_USER = "helpdesk_user"
    STANDARD_USER = "standard_user"
    READONLY_USER = "readonly_user"
    OPERATOR_USER = "operator_user"


class UserRole(StrEnum):
    ADMIN = "admin"
    USER = "user"
    EDGE_ADMIN = "edge_admin"


ACCESS_LEVEL_ROLE_IDS: dict[AccessLevel, int] = {
    AccessLevel.ENVIRONMENT_ADMINISTRATOR: 1,
    AccessLevel.HELPDESK_USER: 2,
    AccessLevel.STANDARD_USER: 3,
    AccessLevel.READONLY_USER: 4,
    AccessLevel.OPERATOR_USER: 5,
}
_ROLE_ID_ACCESS_LEVELS = {role_id: level for level, role_id in ACCESS_LEVEL_ROLE_IDS.items()}

USER_ROLE_IDS: dict[UserRole, int] = {
    UserRole.ADMIN: 1,
    UserRole.USER: 2,
    UserRole.EDGE_ADMIN: 3,
}
_ROLE_ID_USER_ROLES = {role_id: role for role, role_id in USER_ROLE_IDS.items()}

_ENVIRONMENT_TYPES = {
    1: "docker-local",
    2: "docker-agent",
    3: "azure-aci",
    4: "docker-edge-agent",
    5: "kubernetes-local",
    6: "kubernetes-agent",
    7: "kubernetes-edge-agent",
}
_ENVIRONMENT_STATUSES = {1: "active", 2: "inactive"}
_AUTHENTICATION_METHODS = {1: "internal", 2: "ldap", 3: "oauth"}


# ---------------------------------------------------------------------------
# Raw payload helpers
# ---------------------------------------------------------------------------


def _pick(raw: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key; Portainer mixes PascalCase and camelCase."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _int_list(value: Any) -> list[int]:
    if isinstance(value, dict):
        return sorted(int(key) for key in value)
    if isinstance(value, list):
        return [int(item) for item in value]
    return []


def _access_map(policies: Any) -> dict[int, str]:
    """Convert ``{"<id>": {"RoleId": n}}`` policies into ``{id: access_level}``."""
    if not isinstance(policies, dict):
        return {}
    result: dict[int, str] = {}
    for subject_id, policy in policies.items():
        role_id = policy.get("RoleId", 0) if isinstance(policy, dict) else 0
        level = _ROLE_ID_ACCESS_LEVELS.get(role_id)
        result[int(subject_id)] = level.value if level is not None else "unknown"
    return result


def _timestamp(value: Any) -> str:
    if isinstance(value, int | float) and value > 0:
        return datetime.fromtimestamp(value, tz=UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, str):
        return value
    return ""


def access_policies(access_map: dict[int, str]) -> dict[str, dict[str, int]]:
    """Inverse of the access-map conversion, for write payloads."""
    return {
        str(subject_id): {"RoleId": ACCESS_LEVEL_ROLE_IDS[AccessLevel(level)]}
        for subject_id, level in access_map.items()
    }


# ---------------------------------------------------------------------------
# Environments, tags, groups
# ---------------------------------------------------------------------------


class Environment(BaseModel):
    id: int
    name: str
    status: str = "unknown"
    type: str = "unknown"
    url: str = ""
    tag_ids: list[int] = Field(default_factory=list)
    user_accesses: dict[int, str] = Field(default_factory=dict)
    team_accesses: dict[int, str] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Environment:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            status=_ENVIRONMENT_STATUSES.get(_pick(raw, "Status", default=0), "unknown"),
            type=_ENVIRONMENT_TYPES.get(_pick(raw, "Type", default=0), "unknown"),
            url=_pick(raw, "URL", "url", default=""),
            tag_ids=_int_list(_pick(raw, "TagIds", "TagIDs", default=[])),
            user_accesses=_access_map(_pick(raw, "UserAccessPolicies", default={})),
            team_accesses=_access_map(_pick(raw, "TeamAccessPolicies", default={})),
        )


class EnvironmentTag(BaseModel):
    id: int
    name: str
    environment_ids: list[int] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> EnvironmentTag:
        return cls(
            id=_pick(raw, "ID", "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            environment_ids=_int_list(_pick(raw, "Endpoints", default={})),
        )


class EnvironmentGroup(BaseModel):
    """Edge group: a set of environments targeted by edge stacks."""

    id: int
    name: str
    environment_ids: list[int] = Field(default_factory=list)
    tag_ids: list[int] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> EnvironmentGroup:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            environment_ids=_int_list(_pick(raw, "Endpoints", default=[])),
            tag_ids=_int_list(_pick(raw, "TagIds", default=[])),
        )


class AccessGroup(BaseModel):
    """Endpoint group: carries user/team access policies for its environments."""

    id: int
    name: str
    environment_ids: list[int] = Field(default_factory=list)
    user_accesses: dict[int, str] = Field(default_factory=dict)
    team_accesses: dict[int, str] = Field(default_factory=dict)

    @classmethod
    def from_raw(
        cls, raw: dict[str, Any], environments: list[dict[str, Any]] | None = None
    ) -> AccessGroup:
        group_id = _pick(raw, "Id", "id", default=0)
        members = [
            _pick(env, "Id", "id", default=0)
            for env in environments or []
            if _pick(env, "GroupId", default=None) == group_id
        ]
        return cls(
            id=group_id,
            name=_pick(raw, "Name", "name", default=""),
            environment_ids=members,
            user_accesses=_access_map(_pick(raw, "UserAccessPolicies", default={})),
            team_accesses=_access_map(_pick(raw, "TeamAccessPolicies", default={})),
        )


# ---------------------------------------------------------------------------
# Stacks
# ---------------------------------------------------------------------------


class Stack(BaseModel):
    """Edge stack deployed to environment groups."""

    id: int
    name: str
    created_at: str = ""
    group_ids: list[int] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Stack:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            created_at=_timestamp(_pick(raw, "CreationDate", default=0)),
            group_ids=_int_list(_pick(raw, "EdgeGroups", default=[])),
        )


class RegularStack(BaseModel):
    """Compose or swarm stack bound to a single environment."""

    id: int
    name: str
    type: int = 0
    status: int = 0
    endpoint_id: int = 0
    entry_point: str = ""
    swarm_id: str = ""
    created_by: str = ""
    created_at: str = ""
    filesystem_path: str = ""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> RegularStack:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            type=_pick(raw, "Type", default=0),
            status=_pick(raw, "Status", default=0),
            endpoint_id=_pick(raw, "EndpointId", "EndpointID", default=0),
            entry_point=_pick(raw, "EntryPoint", default=""),
            swarm_id=_pick(raw, "SwarmId", default=""),
            created_by=_pick(raw, "CreatedBy", default=""),
            created_at=_timestamp(_pick(raw, "CreationDate", default=0)),
            filesystem_path=_pick(raw, "ProjectPath", default=""),
        )


# ---------------------------------------------------------------------------
# Users, teams, roles
# ---------------------------------------------------------------------------


class User(BaseModel):
    id: int
    username: str
    role: str

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> User:
        role = _ROLE_ID_USER_ROLES.get(_pick(raw, "Role", "role", default=0))
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            username=_pick(raw, "Username", "username", default=""),
            role=role.value if role is not None else "unknown",
        )


class Team(BaseModel):
    id: int
    name: str
    member_ids: list[int] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict[str, Any], memberships: list[dict[str, Any]]) -> Team:
        team_id = _pick(raw, "Id", "id", default=0)
        return cls(
            id=team_id,
            name=_pick(raw, "Name", "name", default=""),
            member_ids=[
                _pick(membership, "UserID", "UserId", default=0)
                for membership in memberships
                if _pick(membership, "TeamID", "TeamId", default=None) == team_id
            ],
        )


class Role(BaseModel):
    id: int
    name: str
    description: str = ""
    priority: int = 0
    authorizations: dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Role:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            description=_pick(raw, "Description", default=""),
            priority=_pick(raw, "Priority", default=0),
            authorizations=_pick(raw, "Authorizations", default={}),
        )


class AuthResponse(BaseModel):
    jwt: str

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> AuthResponse:
        return cls(jwt=_pick(raw, "jwt", "JWT", default=""))


# ---------------------------------------------------------------------------
# Registries, webhooks, templates
# ---------------------------------------------------------------------------


class Registry(BaseModel):
    id: int
    name: str
    type: int
    url: str = ""
    base_url: str = ""
    authentication: bool = False
    username: str = ""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Registry:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            type=_pick(raw, "Type", "type", default=0),
            url=_pick(raw, "URL", "url", default=""),
            base_url=_pick(raw, "BaseURL", "baseURL", default=""),
            authentication=_pick(raw, "Authentication", default=False),
            username=_pick(raw, "Username", default=""),
        )


class Webhook(BaseModel):
    id: int
    endpoint_id: int = 0
    registry_id: int = 0
    resource_id: str = ""
    token: str = ""
    type: int = 0

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Webhook:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            endpoint_id=_pick(raw, "EndpointId", "EndpointID", default=0),
            registry_id=_pick(raw, "RegistryId", "RegistryID", default=0),
            resource_id=_pick(raw, "ResourceId", "ResourceID", default=""),
            token=_pick(raw, "Token", default=""),
            type=_pick(raw, "Type", "WebhookType", default=0),
        )


class CustomTemplate(BaseModel):
    id: int
    title: str
    description: str = ""
    note: str = ""
    platform: int = 0
    type: int = 0
    logo: str = ""
    created_by_user_id: int = 0

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> CustomTemplate:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            title=_pick(raw, "Title", "title", default=""),
            description=_pick(raw, "Description", default=""),
            note=_pick(raw, "Note", default=""),
            platform=_pick(raw, "Platform", default=0),
            type=_pick(raw, "Type", default=0),
            logo=_pick(raw, "Logo", default=""),
            created_by_user_id=_pick(raw, "CreatedByUserId", default=0),
        )


class AppTemplate(BaseModel):
    id: int
    title: str
    description: str = ""
    type: int = 0
    image: str = ""
    categories: list[str] = Field(default_factory=list)
    platform: str = ""
    logo: str = ""
    name: str = ""
    note: str = ""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> AppTemplate:
        return cls(
            id=_pick(raw, "id", "Id", default=0),
            title=_pick(raw, "title", default=""),
            description=_pick(raw, "description", default=""),
            type=_pick(raw, "type", default=0),
            image=_pick(raw, "image", default=""),
            categories=_pick(raw, "categories", default=[]),
            platform=_pick(raw, "platform", default=""),
            logo=_pick(raw, "logo", default=""),
            name=_pick(raw, "name", default=""),
            note=_pick(raw, "note", default=""),
        )


# ---------------------------------------------------------------------------
# Edge compute
# ---------------------------------------------------------------------------


class EdgeJob(BaseModel):
    id: int
    name: str
    cron_expression: str = Field(default="", serialization_alias="cronExpression")
    recurring: bool = False
    created: int = 0
    version: int = 0
    edge_groups: list[int] = Field(default_factory=list, serialization_alias="edgeGroups")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> EdgeJob:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            name=_pick(raw, "Name", "name", default=""),
            cron_expression=_pick(raw, "CronExpression", default=""),
            recurring=_pick(raw, "Recurring", default=False),
            created=_pick(raw, "Created", default=0),
            version=_pick(raw, "Version", default=0),
            edge_groups=_int_list(_pick(raw, "EdgeGroups", default=[])),
        )


class EdgeUpdateSchedule(BaseModel):
    id: int
    name: str
    type: int = 0
    scheduled_time: str = Field(default="", serialization_alias="scheduledTime")
    status: int = 0
    status_message: str = Field(default="", serialization_alias="statusMessage")
    created: int = 0
    created_by: int = Field(default=0, serialization_alias="createdBy")
    edge_group_ids: list[int] = Field(default_factory=list, serialization_alias="edgeGroupIds")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> EdgeUpdateSchedule:
        return cls(
            id=_pick(raw, "id", "Id", default=0),
            name=_pick(raw, "name", "Name", default=""),
            type=_pick(raw, "type", "Type", default=0),
            scheduled_time=_pick(raw, "scheduledTime", "ScheduledTime", default=""),
            status=_pick(raw, "status", "Status", default=0),
            status_message=_pick(raw, "statusMessage", "StatusMessage", default=""),
            created=_pick(raw, "created", "Created", default=0),
            created_by=_pick(raw, "createdBy", "CreatedBy", default=0),
            edge_group_ids=_int_list(_pick(raw, "edgeGroupIds", "EdgeGroupIds", default=[])),
        )


# ---------------------------------------------------------------------------
# Settings, system, backups
# ---------------------------------------------------------------------------


class PortainerSettings(BaseModel):
    authentication_method: str = ""
    edge_compute_enabled: bool = False
    edge_server_url: str = ""
    logo_url: str = ""
    enable_telemetry: bool = False
    required_password_length: int = 0

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> PortainerSettings:
        internal_auth = _pick(raw, "InternalAuthSettings", default={})
        return cls(
            authentication_method=_AUTHENTICATION_METHODS.get(
                _pick(raw, "AuthenticationMethod", default=0), "unknown"
            ),
            edge_compute_enabled=_pick(raw, "EnableEdgeComputeFeatures", default=False),
            edge_server_url=_pick(raw, "EdgePortainerUrl", default=""),
            logo_url=_pick(raw, "LogoURL", default=""),
            enable_telemetry=_pick(raw, "EnableTelemetry", default=False),
            required_password_length=_pick(internal_auth, "RequiredPasswordLength", default=0),
        )


class PublicSettings(BaseModel):
    authentication_method: str = ""
    enable_edge_compute_features: bool = False
    enable_telemetry: bool = False
    logo_url: str = ""
    oauth_login_uri: str = ""
    oauth_logout_uri: str = ""
    oauth_hide_internal_auth: bool = False
    required_password_length: int = 0
    features: dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> PublicSettings:
        return cls(
            authentication_method=_AUTHENTICATION_METHODS.get(
                _pick(raw, "AuthenticationMethod", default=0), "unknown"
            ),
            enable_edge_compute_features=_pick(raw, "EnableEdgeComputeFeatures", default=False),
            enable_telemetry=_pick(raw, "EnableTelemetry", default=False),
            logo_url=_pick(raw, "LogoURL", default=""),
            oauth_login_uri=_pick(raw, "OAuthLoginURI", default=""),
            oauth_logout_uri=_pick(raw, "OAuthLogoutURI", default=""),
            oauth_hide_internal_auth=_pick(raw, "OAuthHideInternalAuth", default=False),
            required_password_length=_pick(raw, "RequiredPasswordLength", default=0),
            features=_pick(raw, "Features", default={}),
        )


class SSLSettings(BaseModel):
    cert_path: str = ""
    key_path: str = ""
    ca_cert_path: str = ""
    http_enabled: bool = False
    self_signed: bool = False

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> SSLSettings:
        return cls(
            cert_path=_pick(raw, "certPath", "CertPath", default=""),
            key_path=_pick(raw, "keyPath", "KeyPath", default=""),
            ca_cert_path=_pick(raw, "caCertPath", "CACertPath", default=""),
            http_enabled=_pick(raw, "httpEnabled", "HTTPEnabled", default=False),
            self_signed=_pick(raw, "selfSigned", "SelfSigned", default=False),
        )


class SystemStatus(BaseModel):
    version: str
    instance_id: str = Field(default="", serialization_alias="instanceID")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> SystemStatus:
        return cls(
            version=_pick(raw, "Version", "version", default=""),
            instance_id=_pick(raw, "InstanceID", "instanceID", default=""),
        )


class MOTD(BaseModel):
    title: str = ""
    message: str = ""
    style: str = ""
    hash: Any = None
    content_layout: dict[str, str] = Field(
        default_factory=dict, serialization_alias="contentLayout"
    )

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> MOTD:
        return cls(
            title=_pick(raw, "Title", "title", default=""),
            message=_pick(raw, "Message", "message", default=""),
            style=_pick(raw, "Style", "style", default=""),
            hash=_pick(raw, "Hash", "hash"),
            content_layout=_pick(raw, "ContentLayout", "contentLayout", default={}),
        )


class BackupStatus(BaseModel):
    failed: bool = False
    timestamp_utc: str = Field(default="", serialization_alias="timestampUTC")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> BackupStatus:
        return cls(
            failed=_pick(raw, "Failed", "failed", default=False),
            timestamp_utc=_pick(raw, "TimestampUTC", "timestampUTC", default=""),
        )


class S3BackupSettings(BaseModel):
    access_key_id: str = Field(default="", serialization_alias="accessKeyID")
    bucket_name: str = Field(default="", serialization_alias="bucketName")
    cron_rule: str = Field(default="", serialization_alias="cronRule")
    password: str = ""
    region: str = ""
    s3_compatible_host: str = Field(default="", serialization_alias="s3CompatibleHost")
    secret_access_key: str = Field(default="", serialization_alias="secretAccessKey")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> S3BackupSettings:
        return cls(
            access_key_id=_pick(raw, "accessKeyID", "AccessKeyID", default=""),
            bucket_name=_pick(raw, "bucketName", "BucketName", default=""),
            cron_rule=_pick(raw, "cronRule", "CronRule", default=""),
            password=_pick(raw, "password", "Password", default=""),
            region=_pick(raw, "region", "Region", default=""),
            s3_compatible_host=_pick(raw, "s3CompatibleHost", "S3CompatibleHost", default=""),
            secret_access_key=_pick(raw, "secretAccessKey", "SecretAccessKey", default=""),
        )


# ---------------------------------------------------------------------------
# Docker and Kubernetes
# ---------------------------------------------------------------------------


class DockerContainerStats(BaseModel):
    healthy: int = 0
    running: int = 0
    stopped: int = 0
    total: int = 0
    unhealthy: int = 0


class DockerImagesCounters(BaseModel):
    size: int = 0
    total: int = 0


class DockerDashboard(BaseModel):
    containers: DockerContainerStats = Field(default_factory=DockerContainerStats)
    images: DockerImagesCounters = Field(default_factory=DockerImagesCounters)
    networks: int = 0
    services: int = 0
    stacks: int = 0
    volumes: int = 0

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> DockerDashboard:
        return cls.model_validate(raw)


class KubernetesDashboard(BaseModel):
    applications_count: int = Field(default=0, alias="applicationsCount")
    config_maps_count: int = Field(default=0, alias="configMapsCount")
    ingresses_count: int = Field(default=0, alias="ingressesCount")
    namespaces_count: int = Field(default=0, alias="namespacesCount")
    secrets_count: int = Field(default=0, alias="secretsCount")
    services_count: int = Field(default=0, alias="servicesCount")
    volumes_count: int = Field(default=0, alias="volumesCount")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> KubernetesDashboard:
        return cls.model_validate(raw)


class KubernetesNamespace(BaseModel):
    id: str = ""
    name: str
    creation_date: str = Field(default="", serialization_alias="creationDate")
    namespace_owner: str = Field(default="", serialization_alias="namespaceOwner")
    is_default: bool = Field(default=False, serialization_alias="isDefault")
    is_system: bool = Field(default=False, serialization_alias="isSystem")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> KubernetesNamespace:
        return cls(
            id=str(_pick(raw, "Id", "id", default="")),
            name=_pick(raw, "Name", "name", default=""),
            creation_date=_pick(raw, "CreationDate", "creationDate", default=""),
            namespace_owner=_pick(raw, "NamespaceOwner", "namespaceOwner", default=""),
            is_default=_pick(raw, "IsDefault", "isDefault", default=False),
            is_system=_pick(raw, "IsSystem", "isSystem", default=False),
        )


# ---------------------------------------------------------------------------
# Helm
# ---------------------------------------------------------------------------


class HelmRepository(BaseModel):
    id: int
    url: str
    user_id: int = Field(default=0, serialization_alias="userId")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> HelmRepository:
        return cls(
            id=_pick(raw, "Id", "id", default=0),
            url=_pick(raw, "URL", "url", default=""),
            user_id=_pick(raw, "UserId", "userId", default=0),
        )


class HelmRepositoryList(BaseModel):
    global_repository: str = Field(default="", serialization_alias="globalRepository")
    user_repositories: list[HelmRepository] = Field(
        default_factory=list, serialization_alias="userRepositories"
    )

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> HelmRepositoryList:
        return cls(
            global_repository=_pick(raw, "GlobalRepository", "globalRepository", default=""),
            user_repositories=[
                HelmRepository.from_raw(item)
                for item in _pick(raw, "UserRepositories", "userRepositories", default=[])
            ],
        )


class HelmRelease(BaseModel):
    name: str
    namespace: str = ""
    revision: str = ""
    status: str = ""
    chart: str = ""
    app_version: str = Field(default="", serialization_alias="appVersion")
    updated: str = ""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> HelmRelease:
        return cls(
            name=_pick(raw, "name", "Name", default=""),
            namespace=_pick(raw, "namespace", "Namespace", default=""),
            revision=str(_pick(raw, "revision", "version", default="")),
            status=_pick(raw, "status", default=""),
            chart=_pick(raw, "chart", default=""),
            app_version=_pick(raw, "app_version", "appVersion", default=""),
            updated=_pick(raw, "updated", default=""),
        )


class HelmReleaseDetails(BaseModel):
    name: str
    namespace: str = ""
    version: int = 0
    app_version: str = Field(default="", serialization_alias="appVersion")
    status: str = ""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> HelmReleaseDetails:
        info = _pick(raw, "info", default={})
        chart = _pick(raw, "chart", default={})
        chart_metadata = _pick(chart, "metadata", default={}) if isinstance(chart, dict) else {}
        return cls(
            name=_pick(raw, "name", default=""),
            namespace=_pick(raw, "namespace", default=""),
            version=_pick(raw, "version", default=0),
            app_version=_pick(chart_metadata, "appVersion", default=""),
            status=_pick(info, "status", default=""),
        )
