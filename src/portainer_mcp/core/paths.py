"""XDG-compliant path helpers for portainer-mcp configuration."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

from portainer_mcp.core.constants import ENV_CONFIG_DIR


def get_config_dir() -> Path:
    """Get the config directory (config.toml)."""
    override = os.environ.get(ENV_CONFIG_DIR)
    if override:
        return Path(override).resolve()
    return Path(user_config_dir("portainer-mcp"))


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.toml"
