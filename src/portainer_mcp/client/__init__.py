"""Portainer REST API client (the backend collaborator)."""

from __future__ import annotations

from portainer_mcp.client.api import (
    PortainerClient,
    ProxyRequest,
    ProxyResponse,
    S3BackupRequest,
)
from portainer_mcp.client.errors import PortainerAPIError, PortainerClientError

__all__ = [
    "PortainerAPIError",
    "PortainerClient",
    "PortainerClientError",
    "ProxyRequest",
    "ProxyResponse",
    "S3BackupRequest",
]
