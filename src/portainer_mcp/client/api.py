"""Async Portainer REST API client.

One method per backend operation. Results are converted into the simplified
models from :mod:`portainer_mcp.client.models`; failures raise
:class:`PortainerClientError` subclasses and are never retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

import httpx

from portainer_mcp.client.errors import PortainerAPIError, PortainerClientError
from portainer_mcp.client.models import (
    MOTD,
    USER_ROLE_IDS,
    AccessGroup,
    AppTemplate,
    AuthResponse,
    BackupStatus,
    CustomTemplate,
    DockerDashboard,
    EdgeJob,
    EdgeUpdateSchedule,
    Environment,
    EnvironmentGroup,
    EnvironmentTag,
    HelmRelease,
    HelmReleaseDetails,
    HelmRepository,
    HelmRepositoryList,
    KubernetesDashboard,
    KubernetesNamespace,
    PortainerSettings,
    PublicSettings,
    RegularStack,
    Registry,
    Role,
    S3BackupSettings,
    SSLSettings,
    Stack,
    SystemStatus,
    Team,
    User,
    UserRole,
    Webhook,
    access_policies,
)
from portainer_mcp.core.constants import API_KEY_HEADER, MAX_PROXY_RESPONSE_BYTES

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

_TEAM_MEMBER_ROLE = 2
_EDGE_STACK_DEPLOYMENT_COMPOSE = 0


@dataclass(frozen=True, slots=True)
class ProxyRequest:
    """A raw request forwarded to an environment's Docker or Kubernetes API."""

    method: str
    path: str
    query_params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass(frozen=True, slots=True)
class ProxyResponse:
    status_code: int
    body: bytes
    truncated: bool = False

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class S3BackupRequest:
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    region: str = ""
    s3_compatible_host: str = ""
    password: str = ""
    cron_rule: str = ""
    filename: str = ""


def _created_id(payload: Any) -> int:
    if isinstance(payload, dict):
        for key in ("Id", "ID", "id"):
            if isinstance(payload.get(key), int):
                return payload[key]
    raise PortainerClientError(f"response did not include an ID: {payload!r}")


def _file_content(payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("StackFileContent", "FileContent", "fileContent"):
            if isinstance(payload.get(key), str):
                return payload[key]
    raise PortainerClientError("response did not include file content")


def _as_list(payload: Any) -> list[dict[str, Any]]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise PortainerClientError(f"expected a JSON array, got {type(payload).__name__}")
    return payload


def _as_dict(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise PortainerClientError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


async def read_limited(response: httpx.Response, limit: int) -> tuple[bytes, bool]:
    """Read at most *limit* bytes of a streamed body; report whether bytes were dropped."""
    buffer = bytearray()
    async for chunk in response.aiter_bytes():
        remaining = limit - len(buffer)
        if len(chunk) > remaining:
            buffer.extend(chunk[:remaining])
            return bytes(buffer), True
        buffer.extend(chunk)
    return bytes(buffer), False


class PortainerClient:
    """Thin async wrapper over the Portainer REST API (``<server>/api``)."""

    def __init__(
        self,
        server_url: str,
        token: str,
        *,
        skip_tls_verify: bool = False,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        max_proxy_response_bytes: int = MAX_PROXY_RESPONSE_BYTES,
    ) -> None:
        self._max_proxy_response_bytes = max_proxy_response_bytes
        self._http = httpx.AsyncClient(
            base_url=f"{server_url.rstrip('/')}/api",
            headers={API_KEY_HEADER: token},
            verify=not skip_tls_verify,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ----- Transport -----

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise PortainerClientError(f"{method} {path} failed: {exc}") from exc
        if response.is_error:
            raise PortainerAPIError.from_response(response)
        return response

    async def _call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and decode its JSON body (None for empty bodies)."""
        response = await self._request(method, path, params=params, json=json)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PortainerClientError(f"invalid JSON from {method} {path}: {exc}") from exc

    async def _proxy(self, path: str, request: ProxyRequest) -> ProxyResponse:
        content = request.body.encode() if request.body else None
        try:
            async with self._http.stream(
                request.method,
                path,
                params=request.query_params or None,
                headers=request.headers or None,
                content=content,
            ) as response:
                body, truncated = await read_limited(response, self._max_proxy_response_bytes)
        except httpx.HTTPError as exc:
            raise PortainerClientError(f"{request.method} {path} failed: {exc}") from exc
        if truncated:
            logger.warning(
                "Proxy response for %s truncated at %d bytes",
                path,
                self._max_proxy_response_bytes,
            )
        return ProxyResponse(status_code=response.status_code, body=body, truncated=truncated)

    # ----- System -----

    async def get_version(self) -> str:
        payload = _as_dict(await self._call("GET", "/system/version"))
        version = payload.get("ServerVersion")
        if not isinstance(version, str) or not version:
            raise PortainerClientError("response did not include ServerVersion")
        return version

    async def get_system_status(self) -> SystemStatus:
        return SystemStatus.from_raw(_as_dict(await self._call("GET", "/system/status")))

    async def list_roles(self) -> list[Role]:
        return [Role.from_raw(raw) for raw in _as_list(await self._call("GET", "/roles"))]

    async def get_motd(self) -> MOTD:
        return MOTD.from_raw(_as_dict(await self._call("GET", "/motd")))

    async def authenticate(self, username: str, password: str) -> AuthResponse:
        payload = await self._call(
            "POST", "/auth", json={"Username": username, "Password": password}
        )
        return AuthResponse.from_raw(_as_dict(payload))

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")

    # ----- Environments -----

    async def list_environments(self) -> list[Environment]:
        raw = _as_list(await self._call("GET", "/endpoints"))
        return [Environment.from_raw(item) for item in raw]

    async def get_environment(self, environment_id: int) -> Environment:
        return Environment.from_raw(_as_dict(await self._call("GET", f"/endpoints/{environment_id}")))

    async def delete_environment(self, environment_id: int) -> None:
        await self._request("DELETE", f"/endpoints/{environment_id}")

    async def snapshot_environment(self, environment_id: int) -> None:
        await self._request("POST", f"/endpoints/{environment_id}/snapshot")

    async def snapshot_all_environments(self) -> None:
        await self._request("POST", "/endpoints/snapshot")

    async def update_environment_tags(self, environment_id: int, tag_ids: list[int]) -> None:
        await self._request("PUT", f"/endpoints/{environment_id}", json={"TagIDs": tag_ids})

    async def update_environment_user_accesses(
        self, environment_id: int, user_accesses: dict[int, str]
    ) -> None:
        await self._request(
            "PUT",
            f"/endpoints/{environment_id}",
            json={"UserAccessPolicies": access_policies(user_accesses)},
        )

    async def update_environment_team_accesses(
        self, environment_id: int, team_accesses: dict[int, str]
    ) -> None:
        await self._request(
            "PUT",
            f"/endpoints/{environment_id}",
            json={"TeamAccessPolicies": access_policies(team_accesses)},
        )

    # ----- Environment tags -----

    async def list_environment_tags(self) -> list[EnvironmentTag]:
        return [EnvironmentTag.from_raw(raw) for raw in _as_list(await self._call("GET", "/tags"))]

    async def create_environment_tag(self, name: str) -> int:
        return _created_id(await self._call("POST", "/tags", json={"name": name}))

    async def delete_environment_tag(self, tag_id: int) -> None:
        await self._request("DELETE", f"/tags/{tag_id}")

    # ----- Environment groups (edge groups) -----

    async def list_environment_groups(self) -> list[EnvironmentGroup]:
        raw = _as_list(await self._call("GET", "/edge_groups"))
        return [EnvironmentGroup.from_raw(item) for item in raw]

    async def create_environment_group(self, name: str, environment_ids: list[int]) -> int:
        payload = {"Name": name, "Dynamic": False, "Endpoints": environment_ids}
        return _created_id(await self._call("POST", "/edge_groups", json=payload))

    async def _update_environment_group(self, group_id: int, **changes: Any) -> None:
        # Fetch, overlay, write back. Not atomic: a concurrent writer between the
        # GET and the PUT is overwritten.
        current = _as_dict(await self._call("GET", f"/edge_groups/{group_id}"))
        payload = {
            "Name": current.get("Name", ""),
            "Dynamic": current.get("Dynamic", False),
            "PartialMatch": current.get("PartialMatch", False),
            "TagIDs": current.get("TagIds") or [],
            "Endpoints": current.get("Endpoints") or [],
        }
        payload.update(changes)
        await self._request("PUT", f"/edge_groups/{group_id}", json=payload)

    async def update_environment_group_name(self, group_id: int, name: str) -> None:
        await self._update_environment_group(group_id, Name=name)

    async def update_environment_group_environments(
        self, group_id: int, environment_ids: list[int]
    ) -> None:
        await self._update_environment_group(group_id, Endpoints=environment_ids)

    async def update_environment_group_tags(self, group_id: int, tag_ids: list[int]) -> None:
        await self._update_environment_group(group_id, TagIDs=tag_ids)

    # ----- Access groups (endpoint groups) -----

    async def list_access_groups(self) -> list[AccessGroup]:
        groups = _as_list(await self._call("GET", "/endpoint_groups"))
        environments = _as_list(await self._call("GET", "/endpoints"))
        return [AccessGroup.from_raw(group, environments) for group in groups]

    async def create_access_group(self, name: str, environment_ids: list[int]) -> int:
        payload = {"Name": name, "AssociatedEndpoints": environment_ids}
        return _created_id(await self._call("POST", "/endpoint_groups", json=payload))

    async def _update_access_group(self, group_id: int, **changes: Any) -> None:
        current = _as_dict(await self._call("GET", f"/endpoint_groups/{group_id}"))
        payload = {
            "Name": current.get("Name", ""),
            "Description": current.get("Description", ""),
            "TagIDs": current.get("TagIds") or [],
            "UserAccessPolicies": current.get("UserAccessPolicies") or {},
            "TeamAccessPolicies": current.get("TeamAccessPolicies") or {},
        }
        payload.update(changes)
        await self._request("PUT", f"/endpoint_groups/{group_id}", json=payload)

    async def update_access_group_name(self, group_id: int, name: str) -> None:
        await self._update_access_group(group_id, Name=name)

    async def update_access_group_user_accesses(
        self, group_id: int, user_accesses: dict[int, str]
    ) -> None:
        await self._update_access_group(
            group_id, UserAccessPolicies=access_policies(user_accesses)
        )

    async def update_access_group_team_accesses(
        self, group_id: int, team_accesses: dict[int, str]
    ) -> None:
        await self._update_access_group(
            group_id, TeamAccessPolicies=access_policies(team_accesses)
        )

    async def add_environment_to_access_group(self, group_id: int, environment_id: int) -> None:
        await self._request("PUT", f"/endpoint_groups/{group_id}/endpoints/{environment_id}")

    async def remove_environment_from_access_group(
        self, group_id: int, environment_id: int
    ) -> None:
        await self._request("DELETE", f"/endpoint_groups/{group_id}/endpoints/{environment_id}")

    # ----- Edge stacks -----

    async def list_edge_stacks(self) -> list[Stack]:
        return [Stack.from_raw(raw) for raw in _as_list(await self._call("GET", "/edge_stacks"))]

    async def get_edge_stack_file(self, stack_id: int) -> str:
        return _file_content(await self._call("GET", f"/edge_stacks/{stack_id}/file"))

    async def create_edge_stack(
        self, name: str, file_content: str, environment_group_ids: list[int]
    ) -> int:
        payload = {
            "name": name,
            "stackFileContent": file_content,
            "edgeGroups": environment_group_ids,
            "deploymentType": _EDGE_STACK_DEPLOYMENT_COMPOSE,
        }
        return _created_id(await self._call("POST", "/edge_stacks/create/string", json=payload))

    async def update_edge_stack(
        self, stack_id: int, file_content: str, environment_group_ids: list[int]
    ) -> None:
        payload = {
            "stackFileContent": file_content,
            "edgeGroups": environment_group_ids,
            "deploymentType": _EDGE_STACK_DEPLOYMENT_COMPOSE,
            "updateVersion": True,
        }
        await self._request("PUT", f"/edge_stacks/{stack_id}", json=payload)

    # ----- Regular stacks -----

    async def list_regular_stacks(self) -> list[RegularStack]:
        raw = _as_list(await self._call("GET", "/stacks"))
        return [RegularStack.from_raw(item) for item in raw]

    async def get_stack(self, stack_id: int) -> RegularStack:
        return RegularStack.from_raw(_as_dict(await self._call("GET", f"/stacks/{stack_id}")))

    async def get_stack_file(self, stack_id: int) -> str:
        return _file_content(await self._call("GET", f"/stacks/{stack_id}/file"))

    async def delete_stack(self, stack_id: int, environment_id: int, remove_volumes: bool) -> None:
        params = {"endpointId": environment_id, "removeVolumes": str(remove_volumes).lower()}
        await self._request("DELETE", f"/stacks/{stack_id}", params=params)

    async def update_stack_git(
        self, stack_id: int, environment_id: int, reference_name: str, prune: bool
    ) -> RegularStack:
        payload: dict[str, Any] = {"Prune": prune}
        if reference_name:
            payload["RepositoryReferenceName"] = reference_name
        raw = await self._call(
            "POST",
            f"/stacks/{stack_id}/git",
            params={"endpointId": environment_id},
            json=payload,
        )
        return RegularStack.from_raw(_as_dict(raw))

    async def redeploy_stack_git(
        self, stack_id: int, environment_id: int, pull_image: bool, prune: bool
    ) -> RegularStack:
        raw = await self._call(
            "PUT",
            f"/stacks/{stack_id}/git/redeploy",
            params={"endpointId": environment_id},
            json={"PullImage": pull_image, "Prune": prune},
        )
        return RegularStack.from_raw(_as_dict(raw))

    async def start_stack(self, stack_id: int, environment_id: int) -> RegularStack:
        raw = await self._call(
            "POST", f"/stacks/{stack_id}/start", params={"endpointId": environment_id}
        )
        return RegularStack.from_raw(_as_dict(raw))

    async def stop_stack(self, stack_id: int, environment_id: int) -> RegularStack:
        raw = await self._call(
            "POST", f"/stacks/{stack_id}/stop", params={"endpointId": environment_id}
        )
        return RegularStack.from_raw(_as_dict(raw))

    async def migrate_stack(
        self, stack_id: int, environment_id: int, target_environment_id: int, name: str
    ) -> RegularStack:
        payload: dict[str, Any] = {"EndpointID": target_environment_id}
        if name:
            payload["Name"] = name
        raw = await self._call(
            "POST",
            f"/stacks/{stack_id}/migrate",
            params={"endpointId": environment_id},
            json=payload,
        )
        return RegularStack.from_raw(_as_dict(raw))

    # ----- Teams -----

    async def _team_memberships(self) -> list[dict[str, Any]]:
        return _as_list(await self._call("GET", "/team_memberships"))

    async def list_teams(self) -> list[Team]:
        teams = _as_list(await self._call("GET", "/teams"))
        memberships = await self._team_memberships()
        return [Team.from_raw(team, memberships) for team in teams]

    async def get_team(self, team_id: int) -> Team:
        team = _as_dict(await self._call("GET", f"/teams/{team_id}"))
        return Team.from_raw(team, await self._team_memberships())

    async def create_team(self, name: str) -> int:
        return _created_id(await self._call("POST", "/teams", json={"Name": name}))

    async def delete_team(self, team_id: int) -> None:
        await self._request("DELETE", f"/teams/{team_id}")

    async def update_team_name(self, team_id: int, name: str) -> None:
        await self._request("PUT", f"/teams/{team_id}", json={"Name": name})

    async def update_team_members(self, team_id: int, user_ids: list[int]) -> None:
        """Make the team's membership exactly *user_ids*."""
        wanted = set(user_ids)
        existing: dict[int, int] = {}
        for membership in await self._team_memberships():
            if membership.get("TeamID") != team_id:
                continue
            user_id = membership.get("UserID")
            if user_id in wanted:
                existing[user_id] = membership["Id"]
            else:
                await self._request("DELETE", f"/team_memberships/{membership['Id']}")
        for user_id in user_ids:
            if user_id in existing:
                continue
            await self._request(
                "POST",
                "/team_memberships",
                json={"UserID": user_id, "TeamID": team_id, "Role": _TEAM_MEMBER_ROLE},
            )
            existing[user_id] = 0

    # ----- Users -----

    async def list_users(self) -> list[User]:
        return [User.from_raw(raw) for raw in _as_list(await self._call("GET", "/users"))]

    async def get_user(self, user_id: int) -> User:
        return User.from_raw(_as_dict(await self._call("GET", f"/users/{user_id}")))

    async def create_user(self, username: str, password: str, role: str) -> int:
        payload = {
            "Username": username,
            "Password": password,
            "Role": USER_ROLE_IDS[UserRole(role)],
        }
        return _created_id(await self._call("POST", "/users", json=payload))

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/users/{user_id}")

    async def update_user_role(self, user_id: int, role: str) -> None:
        await self._request(
            "PUT", f"/users/{user_id}", json={"Role": USER_ROLE_IDS[UserRole(role)]}
        )

    # ----- Settings -----

    async def get_settings(self) -> PortainerSettings:
        return PortainerSettings.from_raw(_as_dict(await self._call("GET", "/settings")))

    async def update_settings(self, settings: dict[str, Any]) -> None:
        await self._request("PUT", "/settings", json=settings)

    async def get_public_settings(self) -> PublicSettings:
        return PublicSettings.from_raw(_as_dict(await self._call("GET", "/settings/public")))

    async def get_ssl_settings(self) -> SSLSettings:
        return SSLSettings.from_raw(_as_dict(await self._call("GET", "/ssl")))

    async def update_ssl_settings(
        self, cert: str | None, key: str | None, http_enabled: bool | None
    ) -> None:
        payload: dict[str, Any] = {}
        if cert is not None:
            payload["cert"] = cert
        if key is not None:
            payload["key"] = key
        if http_enabled is not None:
            payload["httpenabled"] = http_enabled
        await self._request("PUT", "/ssl", json=payload)

    # ----- Templates -----

    async def list_app_templates(self) -> list[AppTemplate]:
        payload = await self._call("GET", "/templates")
        raw = payload.get("templates", []) if isinstance(payload, dict) else payload
        return [AppTemplate.from_raw(item) for item in _as_list(raw)]

    async def get_app_template_file(self, template_id: int) -> str:
        return _file_content(await self._call("POST", f"/templates/{template_id}/file"))

    async def list_custom_templates(self) -> list[CustomTemplate]:
        raw = _as_list(await self._call("GET", "/custom_templates"))
        return [CustomTemplate.from_raw(item) for item in raw]

    async def get_custom_template(self, template_id: int) -> CustomTemplate:
        raw = await self._call("GET", f"/custom_templates/{template_id}")
        return CustomTemplate.from_raw(_as_dict(raw))

    async def get_custom_template_file(self, template_id: int) -> str:
        return _file_content(await self._call("GET", f"/custom_templates/{template_id}/file"))

    async def create_custom_template(
        self,
        *,
        title: str,
        description: str,
        note: str,
        logo: str,
        file_content: str,
        platform: int,
        template_type: int,
    ) -> int:
        payload = {
            "Title": title,
            "Description": description,
            "Note": note,
            "Logo": logo,
            "FileContent": file_content,
            "Platform": platform,
            "Type": template_type,
        }
        raw = await self._call("POST", "/custom_templates/create/string", json=payload)
        return _created_id(raw)

    async def delete_custom_template(self, template_id: int) -> None:
        await self._request("DELETE", f"/custom_templates/{template_id}")

    # ----- Registries -----

    async def list_registries(self) -> list[Registry]:
        return [Registry.from_raw(raw) for raw in _as_list(await self._call("GET", "/registries"))]

    async def get_registry(self, registry_id: int) -> Registry:
        return Registry.from_raw(_as_dict(await self._call("GET", f"/registries/{registry_id}")))

    async def create_registry(
        self,
        *,
        name: str,
        registry_type: int,
        url: str,
        authentication: bool,
        username: str = "",
        password: str = "",
        base_url: str = "",
    ) -> int:
        payload = {
            "Name": name,
            "Type": registry_type,
            "URL": url,
            "BaseURL": base_url,
            "Authentication": authentication,
            "Username": username,
            "Password": password,
        }
        return _created_id(await self._call("POST", "/registries", json=payload))

    async def update_registry(self, registry_id: int, changes: dict[str, Any]) -> None:
        """Overlay *changes* (Portainer field names) on the current registry and write it back."""
        current = _as_dict(await self._call("GET", f"/registries/{registry_id}"))
        payload = {
            "Name": current.get("Name", ""),
            "URL": current.get("URL", ""),
            "BaseURL": current.get("BaseURL", ""),
            "Authentication": current.get("Authentication", False),
            "Username": current.get("Username", ""),
        }
        payload.update(changes)
        await self._request("PUT", f"/registries/{registry_id}", json=payload)

    async def delete_registry(self, registry_id: int) -> None:
        await self._request("DELETE", f"/registries/{registry_id}")

    # ----- Backups -----

    async def get_backup_status(self) -> BackupStatus:
        return BackupStatus.from_raw(_as_dict(await self._call("GET", "/backup/s3/status")))

    async def get_backup_s3_settings(self) -> S3BackupSettings:
        raw = await self._call("GET", "/backup/s3/settings")
        return S3BackupSettings.from_raw(_as_dict(raw))

    async def create_backup(self, password: str) -> None:
        # The archive body is discarded.
        await self._request("POST", "/backup", json={"password": password})

    async def backup_to_s3(self, request: S3BackupRequest) -> None:
        payload = {
            "accessKeyID": request.access_key_id,
            "secretAccessKey": request.secret_access_key,
            "bucketName": request.bucket_name,
            "region": request.region,
            "s3CompatibleHost": request.s3_compatible_host,
            "password": request.password,
            "cronRule": request.cron_rule,
        }
        await self._request("POST", "/backup/s3/execute", json=payload)

    async def restore_from_s3(self, request: S3BackupRequest) -> None:
        payload = {
            "accessKeyID": request.access_key_id,
            "secretAccessKey": request.secret_access_key,
            "bucketName": request.bucket_name,
            "filename": request.filename,
            "password": request.password,
            "region": request.region,
            "s3CompatibleHost": request.s3_compatible_host,
        }
        await self._request("POST", "/backup/s3/restore", json=payload)

    # ----- Webhooks -----

    async def list_webhooks(self) -> list[Webhook]:
        return [Webhook.from_raw(raw) for raw in _as_list(await self._call("GET", "/webhooks"))]

    async def create_webhook(self, resource_id: str, endpoint_id: int, webhook_type: int) -> int:
        payload = {
            "ResourceID": resource_id,
            "EndpointID": endpoint_id,
            "WebhookType": webhook_type,
        }
        return _created_id(await self._call("POST", "/webhooks", json=payload))

    async def delete_webhook(self, webhook_id: int) -> None:
        await self._request("DELETE", f"/webhooks/{webhook_id}")

    # ----- Edge compute -----

    async def list_edge_jobs(self) -> list[EdgeJob]:
        return [EdgeJob.from_raw(raw) for raw in _as_list(await self._call("GET", "/edge_jobs"))]

    async def get_edge_job(self, job_id: int) -> EdgeJob:
        return EdgeJob.from_raw(_as_dict(await self._call("GET", f"/edge_jobs/{job_id}")))

    async def get_edge_job_file(self, job_id: int) -> str:
        return _file_content(await self._call("GET", f"/edge_jobs/{job_id}/file"))

    async def create_edge_job(
        self,
        *,
        name: str,
        cron_expression: str,
        file_content: str,
        recurring: bool,
        endpoints: list[int],
        edge_groups: list[int],
    ) -> int:
        payload = {
            "name": name,
            "cronExpression": cron_expression,
            "fileContent": file_content,
            "recurring": recurring,
            "endpoints": endpoints,
            "edgeGroups": edge_groups,
        }
        return _created_id(await self._call("POST", "/edge_jobs/create/string", json=payload))

    async def delete_edge_job(self, job_id: int) -> None:
        await self._request("DELETE", f"/edge_jobs/{job_id}")

    async def list_edge_update_schedules(self) -> list[EdgeUpdateSchedule]:
        raw = _as_list(await self._call("GET", "/edge_update_schedules"))
        return [EdgeUpdateSchedule.from_raw(item) for item in raw]

    # ----- Docker -----

    async def get_docker_dashboard(self, environment_id: int) -> DockerDashboard:
        raw = await self._call("GET", f"/docker/{environment_id}/dashboard")
        return DockerDashboard.from_raw(_as_dict(raw))

    async def proxy_docker_request(
        self, environment_id: int, request: ProxyRequest
    ) -> ProxyResponse:
        return await self._proxy(f"/endpoints/{environment_id}/docker{request.path}", request)

    # ----- Kubernetes -----

    async def proxy_kubernetes_request(
        self, environment_id: int, request: ProxyRequest
    ) -> ProxyResponse:
        return await self._proxy(f"/endpoints/{environment_id}/kubernetes{request.path}", request)

    async def get_kubernetes_dashboard(self, environment_id: int) -> KubernetesDashboard:
        raw = await self._call("GET", f"/kubernetes/{environment_id}/dashboard")
        return KubernetesDashboard.from_raw(_as_dict(raw))

    async def list_kubernetes_namespaces(self, environment_id: int) -> list[KubernetesNamespace]:
        raw = await self._call("GET", f"/kubernetes/{environment_id}/namespaces")
        if isinstance(raw, dict):
            raw = list(raw.values())
        return [KubernetesNamespace.from_raw(item) for item in _as_list(raw)]

    async def get_kubernetes_config(self, environment_id: int) -> Any:
        return await self._call("GET", "/kubernetes/config", params={"ids[]": environment_id})

    # ----- Helm -----

    async def list_helm_repositories(self, user_id: int) -> HelmRepositoryList:
        raw = await self._call("GET", f"/users/{user_id}/helm/repositories")
        return HelmRepositoryList.from_raw(_as_dict(raw))

    async def add_helm_repository(self, user_id: int, url: str) -> HelmRepository:
        raw = await self._call("POST", f"/users/{user_id}/helm/repositories", json={"url": url})
        return HelmRepository.from_raw(_as_dict(raw))

    async def remove_helm_repository(self, user_id: int, repository_id: int) -> None:
        await self._request("DELETE", f"/users/{user_id}/helm/repositories/{repository_id}")

    async def search_helm_charts(self, repo: str, chart: str) -> str:
        params = {"repo": repo}
        if chart:
            params["chart"] = chart
        response = await self._request("GET", "/templates/helm", params=params)
        return response.text

    async def install_helm_chart(
        self,
        environment_id: int,
        *,
        chart: str,
        name: str,
        repo: str,
        namespace: str = "",
        values: str = "",
        version: str = "",
    ) -> HelmReleaseDetails:
        payload = {
            "chart": chart,
            "name": name,
            "repo": repo,
            "namespace": namespace,
            "values": values,
            "version": version,
        }
        raw = await self._call(
            "POST", f"/endpoints/{environment_id}/kubernetes/helm", json=payload
        )
        return HelmReleaseDetails.from_raw(_as_dict(raw))

    async def list_helm_releases(
        self, environment_id: int, *, namespace: str = "", filter: str = "", selector: str = ""
    ) -> list[HelmRelease]:
        params = {
            key: value
            for key, value in (("namespace", namespace), ("filter", filter), ("selector", selector))
            if value
        }
        raw = await self._call(
            "GET", f"/endpoints/{environment_id}/kubernetes/helm", params=params or None
        )
        return [HelmRelease.from_raw(item) for item in _as_list(raw)]

    async def delete_helm_release(self, environment_id: int, release: str, namespace: str) -> None:
        params = {"namespace": namespace} if namespace else None
        await self._request(
            "DELETE", f"/endpoints/{environment_id}/kubernetes/helm/{release}", params=params
        )

    async def get_helm_release_history(
        self, environment_id: int, name: str, namespace: str
    ) -> list[HelmReleaseDetails]:
        params = {"namespace": namespace} if namespace else None
        raw = await self._call(
            "GET", f"/endpoints/{environment_id}/kubernetes/helm/{name}/history", params=params
        )
        return [HelmReleaseDetails.from_raw(item) for item in _as_list(raw)]
