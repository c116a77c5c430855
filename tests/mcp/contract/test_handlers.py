"""Behavior tests for individual operation handlers against a mocked backend."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from portainer_mcp.client.api import ProxyResponse, S3BackupRequest
from portainer_mcp.client.models import HelmReleaseDetails, RegularStack
from portainer_mcp.core.errors import ParameterError, ValidationError
from portainer_mcp.mcp.handlers import (
    backups,
    docker,
    edge,
    environments,
    helm,
    kubernetes,
    registries,
    settings,
    stacks,
    templates,
    users,
    webhooks,
)
from portainer_mcp.mcp.parameters import ParameterParser

if TYPE_CHECKING:
    from unittest.mock import AsyncMock

_COMPOSE = "services:\n  web:\n    image: nginx:latest\n"


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------


async def test_create_environment_group(mock_client: AsyncMock) -> None:
    mock_client.create_environment_group.return_value = 12

    result = await environments.create_environment_group(
        mock_client, ParameterParser({"name": "edge-east", "environmentIds": [1, 2]})
    )

    assert result.text == "Environment group created successfully with ID: 12"
    mock_client.create_environment_group.assert_awaited_once_with("edge-east", [1, 2])


async def test_team_accesses_are_converted(mock_client: AsyncMock) -> None:
    await environments.update_environment_team_accesses(
        mock_client,
        ParameterParser({"id": 3, "teamAccesses": [{"id": 5, "access": "operator_user"}]}),
    )

    mock_client.update_environment_team_accesses.assert_awaited_once_with(
        3, {5: "operator_user"}
    )


# ---------------------------------------------------------------------------
# Stacks
# ---------------------------------------------------------------------------


async def test_create_stack_validates_compose_before_calling(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="invalid compose file"):
        await stacks.create_stack(
            mock_client,
            ParameterParser({"name": "web", "file": "nope", "environmentGroupIds": [1]}),
        )

    mock_client.create_edge_stack.assert_not_awaited()


async def test_create_stack(mock_client: AsyncMock) -> None:
    mock_client.create_edge_stack.return_value = 42

    result = await stacks.create_stack(
        mock_client,
        ParameterParser({"name": "web", "file": _COMPOSE, "environmentGroupIds": [1, 2]}),
    )

    assert result.text == "Stack created successfully with ID: 42"
    mock_client.create_edge_stack.assert_awaited_once_with("web", _COMPOSE, [1, 2])


async def test_stop_stack_returns_stack_document(mock_client: AsyncMock) -> None:
    mock_client.stop_stack.return_value = RegularStack(id=4, name="web", status=2)

    result = await stacks.stop_stack(mock_client, ParameterParser({"id": 4, "environmentId": 1}))

    assert json.loads(result.text)["status"] == 2
    mock_client.stop_stack.assert_awaited_once_with(4, 1)


async def test_delete_stack_defaults_remove_volumes(mock_client: AsyncMock) -> None:
    await stacks.delete_stack(mock_client, ParameterParser({"id": 4, "environmentId": 1}))

    mock_client.delete_stack.assert_awaited_once_with(4, 1, False)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


async def test_update_user_role_rejects_unknown_role(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="invalid role superuser"):
        await users.update_user_role(mock_client, ParameterParser({"id": 2, "role": "superuser"}))

    mock_client.update_user_role.assert_not_awaited()


async def test_update_user_role(mock_client: AsyncMock) -> None:
    result = await users.update_user_role(mock_client, ParameterParser({"id": 2, "role": "admin"}))

    assert result.text == "User updated successfully"
    mock_client.update_user_role.assert_awaited_once_with(2, "admin")


async def test_update_team_members(mock_client: AsyncMock) -> None:
    await users.update_team_members(mock_client, ParameterParser({"id": 3, "userIds": [1, 4]}))

    mock_client.update_team_members.assert_awaited_once_with(3, [1, 4])


# ---------------------------------------------------------------------------
# Docker and Kubernetes proxies
# ---------------------------------------------------------------------------


async def test_docker_proxy_forwards_request(mock_client: AsyncMock) -> None:
    mock_client.proxy_docker_request.return_value = ProxyResponse(200, b'[{"Id": "abc"}]')

    result = await docker.docker_proxy(
        mock_client,
        ParameterParser(
            {
                "environmentId": 1,
                "method": "GET",
                "dockerAPIPath": "/containers/json",
                "queryParams": [{"key": "all", "value": "true"}],
            }
        ),
    )

    assert result.text == '[{"Id": "abc"}]'
    environment_id, request = mock_client.proxy_docker_request.await_args.args
    assert environment_id == 1
    assert request.method == "GET"
    assert request.path == "/containers/json"
    assert request.query_params == {"all": "true"}
    assert request.body is None


@pytest.mark.parametrize(
    ("arguments", "message"),
    [
        ({"method": "FETCH", "dockerAPIPath": "/info"}, "invalid method: FETCH"),
        ({"method": "GET", "dockerAPIPath": "info"}, "must start with a leading slash"),
    ],
)
async def test_docker_proxy_rejects_bad_requests(
    mock_client: AsyncMock, arguments: dict[str, str], message: str
) -> None:
    with pytest.raises(ValidationError, match=message):
        await docker.docker_proxy(mock_client, ParameterParser({"environmentId": 1, **arguments}))

    mock_client.proxy_docker_request.assert_not_awaited()


async def test_stripped_kubernetes_resource(mock_client: AsyncMock) -> None:
    document = {
        "kind": "PodList",
        "metadata": {"resourceVersion": "1"},
        "items": [
            {
                "metadata": {
                    "name": "web",
                    "managedFields": [{"manager": "kubectl"}],
                    "annotations": {
                        kubernetes.LAST_APPLIED_ANNOTATION: "{}",
                        "team": "ops",
                    },
                }
            }
        ],
    }
    mock_client.proxy_kubernetes_request.return_value = ProxyResponse(
        200, json.dumps(document).encode()
    )

    result = await kubernetes.get_kubernetes_resource_stripped(
        mock_client,
        ParameterParser({"environmentId": 2, "kubernetesAPIPath": "/api/v1/pods"}),
    )

    metadata = json.loads(result.text)["items"][0]["metadata"]
    assert "managedFields" not in metadata
    assert metadata["annotations"] == {"team": "ops"}
    _, request = mock_client.proxy_kubernetes_request.await_args.args
    assert request.method == "GET"


async def test_stripped_resource_passes_through_non_json(mock_client: AsyncMock) -> None:
    mock_client.proxy_kubernetes_request.return_value = ProxyResponse(200, b"not json", True)

    result = await kubernetes.get_kubernetes_resource_stripped(
        mock_client,
        ParameterParser({"environmentId": 2, "kubernetesAPIPath": "/version"}),
    )

    assert result.is_error is False
    assert result.text == "not json"


def test_strip_resource_ignores_non_objects() -> None:
    assert kubernetes.strip_resource([1, 2]) == [1, 2]
    assert kubernetes.strip_resource({"metadata": "x"}) == {"metadata": "x"}


# ---------------------------------------------------------------------------
# Helm, registries, templates
# ---------------------------------------------------------------------------


async def test_install_helm_chart_message(mock_client: AsyncMock) -> None:
    mock_client.install_helm_chart.return_value = HelmReleaseDetails(name="web", namespace="apps")

    result = await helm.install_helm_chart(
        mock_client,
        ParameterParser(
            {
                "environmentId": 1,
                "chart": "nginx",
                "name": "web",
                "repo": "https://charts.bitnami.com/bitnami",
                "namespace": "apps",
            }
        ),
    )

    assert result.text.startswith("Helm chart installed successfully: {")
    assert json.loads(result.text.split(": ", 1)[1])["name"] == "web"


async def test_add_helm_repository_requires_absolute_url(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="invalid url"):
        await helm.add_helm_repository(
            mock_client, ParameterParser({"userId": 1, "url": "charts.example"})
        )


async def test_update_registry_sends_only_given_fields(mock_client: AsyncMock) -> None:
    await registries.update_registry(
        mock_client, ParameterParser({"id": 3, "username": "bot", "authentication": True})
    )

    mock_client.update_registry.assert_awaited_once_with(
        3, {"Authentication": True, "Username": "bot"}
    )


async def test_create_registry_rejects_unknown_type(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="invalid type: 9"):
        await registries.create_registry(
            mock_client,
            ParameterParser(
                {"name": "hub", "type": 9, "url": "docker.io", "authentication": False}
            ),
        )


async def test_create_custom_template_rejects_bad_platform(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="invalid platform: 3"):
        await templates.create_custom_template(
            mock_client,
            ParameterParser(
                {
                    "title": "nginx",
                    "description": "web server",
                    "fileContent": _COMPOSE,
                    "type": 2,
                    "platform": 3,
                }
            ),
        )


# ---------------------------------------------------------------------------
# Backups, webhooks, edge jobs, settings
# ---------------------------------------------------------------------------


async def test_backup_to_s3_builds_request(mock_client: AsyncMock) -> None:
    await backups.backup_to_s3(
        mock_client,
        ParameterParser(
            {
                "accessKeyID": "AKIA",
                "secretAccessKey": "secret",
                "bucketName": "backups",
                "cronRule": "0 2 * * *",
            }
        ),
    )

    mock_client.backup_to_s3.assert_awaited_once_with(
        S3BackupRequest(
            access_key_id="AKIA",
            secret_access_key="secret",
            bucket_name="backups",
            cron_rule="0 2 * * *",
        )
    )


async def test_restore_from_s3_requires_filename(mock_client: AsyncMock) -> None:
    with pytest.raises(ParameterError, match="invalid filename parameter"):
        await backups.restore_from_s3(
            mock_client,
            ParameterParser(
                {"accessKeyID": "AKIA", "secretAccessKey": "secret", "bucketName": "backups"}
            ),
        )


async def test_create_webhook_rejects_unknown_type(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="must be 1=service or 2=container"):
        await webhooks.create_webhook(
            mock_client,
            ParameterParser({"resourceId": "svc", "endpointId": 1, "webhookType": 3}),
        )


async def test_create_edge_job_rejects_short_cron(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="expected 5 fields, got 4"):
        await edge.create_edge_job(
            mock_client,
            ParameterParser(
                {"name": "cleanup", "cronExpression": "0 * * *", "fileContent": "echo hi"}
            ),
        )

    mock_client.create_edge_job.assert_not_awaited()


async def test_create_edge_job_defaults(mock_client: AsyncMock) -> None:
    mock_client.create_edge_job.return_value = 8

    result = await edge.create_edge_job(
        mock_client,
        ParameterParser(
            {"name": "cleanup", "cronExpression": "0 3 * * *", "fileContent": "echo hi"}
        ),
    )

    assert result.text == "Edge job created successfully with ID: 8"
    kwargs = mock_client.create_edge_job.await_args.kwargs
    assert kwargs["recurring"] is False
    assert kwargs["endpoints"] == []
    assert kwargs["edge_groups"] == []


async def test_update_settings_requires_json_object(mock_client: AsyncMock) -> None:
    with pytest.raises(ValidationError, match="failed to parse settings JSON"):
        await settings.update_settings(mock_client, ParameterParser({"settings": "[]"}))


async def test_update_ssl_settings_omits_absent_fields(mock_client: AsyncMock) -> None:
    await settings.update_ssl_settings(mock_client, ParameterParser({"httpEnabled": True}))

    mock_client.update_ssl_settings.assert_awaited_once_with(None, None, True)
