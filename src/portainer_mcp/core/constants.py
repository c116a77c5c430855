"""Process-wide constants."""

from __future__ import annotations

from typing import Final

SERVER_NAME: Final = "Portainer MCP Server"
SERVER_VERSION: Final = "0.5.1"

# Backend release this server is verified against; only major.minor is compared.
SUPPORTED_PORTAINER_VERSION: Final = "2.31.2"

# Oldest tool schema file format accepted by the loader.
MINIMUM_TOOLS_VERSION: Final = "v1.0"

MAX_PROXY_RESPONSE_BYTES: Final = 10 * 1024 * 1024

DEFAULT_TIMEOUT_SECONDS: Final = 30.0
DEFAULT_LOG_LEVEL: Final = "WARNING"
LOG_LEVELS: Final = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

API_KEY_HEADER: Final = "X-API-Key"

ENV_CONFIG_DIR: Final = "PORTAINER_MCP_CONFIG_DIR"
ENV_SERVER_URL: Final = "PORTAINER_MCP_SERVER_URL"
ENV_TOKEN: Final = "PORTAINER_MCP_TOKEN"

ACTION_PARAMETER: Final = "action"
