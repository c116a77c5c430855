"""Configuration loader for portainer-mcp."""

from __future__ import annotations

import os
import tempfile
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from pydantic import BaseModel, Field, ValidationError, field_validator

from portainer_mcp.core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_SERVER_URL,
    ENV_TOKEN,
    LOG_LEVELS,
)
from portainer_mcp.core.errors import STARTUP_CODE_CONFIG, StartupError
from portainer_mcp.core.paths import get_config_path

if TYPE_CHECKING:
    from collections.abc import Mapping


def atomic_write(path: Path, content: str) -> None:
    """Write file atomically to avoid partial/corrupt writes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        Path(tmp_path).replace(path)
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise


def normalize_server_url(value: str) -> str:
    """Strip trailing slashes and default to https when no scheme is given."""
    url = value.strip().rstrip("/")
    if not url:
        return url
    if "://" not in url:
        url = f"https://{url}"
    return url


def normalize_log_level(value: str) -> str:
    """Upper-case a logging level name and reject unknown ones."""
    normalized = value.strip().upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    return normalized


class ServerConfig(BaseModel):
    """Connection and tool-surface settings."""

    url: str = Field(default="", description="Portainer base URL (the API lives under /api)")
    token: str = Field(default="", description="Portainer API access token", repr=False)
    tools_path: Path | None = Field(
        default=None, description="Tool schema YAML file (None = bundled tools.yaml)"
    )
    read_only: bool = Field(default=False, description="Expose only read-only operations")
    granular_tools: bool = Field(
        default=False, description="Advertise every operation as its own tool"
    )
    disable_version_check: bool = Field(
        default=False, description="Skip the Portainer version compatibility check"
    )
    skip_tls_verify: bool = Field(
        default=False, description="Do not verify the Portainer TLS certificate"
    )
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    log_level: str = Field(default=DEFAULT_LOG_LEVEL)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        return normalize_server_url(value)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        return normalize_log_level(value)


class PortainerMCPConfig(BaseModel):
    """Root configuration model."""

    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> PortainerMCPConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)
        except (tomllib.TOMLDecodeError, ValidationError) as exc:
            raise StartupError(
                code=STARTUP_CODE_CONFIG,
                message=f"invalid config file {config_path}: {exc}",
                hint="Fix the file or regenerate it with 'portainer-mcp config init --force'.",
            ) from exc

    def with_environment(self, environ: Mapping[str, str] | None = None) -> PortainerMCPConfig:
        """Overlay connection settings from environment variables."""
        env = os.environ if environ is None else environ
        updates: dict[str, Any] = {}
        if env.get(ENV_SERVER_URL):
            updates["url"] = normalize_server_url(env[ENV_SERVER_URL])
        if env.get(ENV_TOKEN):
            updates["token"] = env[ENV_TOKEN]
        if not updates:
            return self
        return self.model_copy(update={"server": self.server.model_copy(update=updates)})

    def with_overrides(self, **overrides: Any) -> PortainerMCPConfig:
        """Overlay explicitly supplied values (None means not supplied)."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if "url" in updates:
            updates["url"] = normalize_server_url(updates["url"])
        if "log_level" in updates:
            updates["log_level"] = normalize_log_level(updates["log_level"])
        if not updates:
            return self
        return self.model_copy(update={"server": self.server.model_copy(update=updates)})

    def save(self, path: Path, *, include_token: bool = False) -> None:
        """Serialize config to a TOML file.

        Args:
            path: Path to write config file (created if missing)
            include_token: Persist the API token (off unless explicitly requested)
        """
        doc = tomlkit.document()
        doc.add(tomlkit.comment("portainer-mcp configuration"))

        server_table = tomlkit.table()
        for key, value in self.server.model_dump().items():
            if value is None:
                continue
            if key == "token" and not include_token:
                continue
            server_table[key] = str(value) if isinstance(value, Path) else value
        if not include_token:
            server_table.add(tomlkit.comment(f"token = \"...\"  # or set {ENV_TOKEN}"))
        doc["server"] = server_table

        atomic_write(path, tomlkit.dumps(doc))
