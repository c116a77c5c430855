"""Server backup and S3 restore operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.client.api import S3BackupRequest
from portainer_mcp.mcp.catalog import Permission
from portainer_mcp.mcp.dispatch import backend_call
from portainer_mcp.mcp.envelope import ToolResult, json_result, text_result

if TYPE_CHECKING:
    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.parameters import ParameterParser


def _s3_credentials(params: ParameterParser) -> dict[str, str]:
    return {
        "access_key_id": params.get_string("accessKeyID", required=True),
        "secret_access_key": params.get_string("secretAccessKey", required=True),
        "bucket_name": params.get_string("bucketName", required=True),
        "region": params.get_string("region"),
        "s3_compatible_host": params.get_string("s3CompatibleHost"),
        "password": params.get_string("password"),
    }


async def get_backup_status(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get backup status"):
        status = await client.get_backup_status()
    return json_result(status, "failed to marshal backup status")


async def get_backup_s3_settings(client: PortainerClient, params: ParameterParser) -> ToolResult:
    with backend_call("failed to get backup S3 settings"):
        settings = await client.get_backup_s3_settings()
    return json_result(settings, "failed to marshal backup S3 settings")


async def create_backup(client: PortainerClient, params: ParameterParser) -> ToolResult:
    password = params.get_string("password")
    with backend_call("failed to create backup"):
        await client.create_backup(password)
    return text_result("Backup created successfully")


async def backup_to_s3(client: PortainerClient, params: ParameterParser) -> ToolResult:
    request = S3BackupRequest(**_s3_credentials(params), cron_rule=params.get_string("cronRule"))
    with backend_call("failed to backup to S3"):
        await client.backup_to_s3(request)
    return text_result("Backup to S3 completed successfully")


async def restore_from_s3(client: PortainerClient, params: ParameterParser) -> ToolResult:
    credentials = _s3_credentials(params)
    request = S3BackupRequest(
        **credentials, filename=params.get_string("filename", required=True)
    )
    with backend_call("failed to restore from S3"):
        await client.restore_from_s3(request)
    return text_result("Restore from S3 completed successfully")


def register_backup_operations(catalog: OperationCatalog) -> None:
    read, write = Permission.READ_ONLY_SAFE, Permission.WRITE_REQUIRED
    catalog.register("getBackupStatus", get_backup_status, read)
    catalog.register("getBackupS3Settings", get_backup_s3_settings, read)
    catalog.register("createBackup", create_backup, write)
    catalog.register("backupToS3", backup_to_s3, write)
    catalog.register("restoreFromS3", restore_from_s3, write)
