"""Tests for configuration loading, layering and persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from portainer_mcp.core.config import (
    PortainerMCPConfig,
    ServerConfig,
    normalize_log_level,
    normalize_server_url,
)
from portainer_mcp.core.constants import DEFAULT_LOG_LEVEL
from portainer_mcp.core.errors import STARTUP_CODE_CONFIG, StartupError


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    config = PortainerMCPConfig.load(tmp_path / "absent.toml")

    assert config.server.url == ""
    assert config.server.read_only is False
    assert config.server.granular_tools is False
    assert config.server.log_level == DEFAULT_LOG_LEVEL


def test_load_reads_server_table(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        '[server]\nurl = "portainer.example.com:9443/"\nread_only = true\nlog_level = "debug"\n',
        encoding="utf-8",
    )

    config = PortainerMCPConfig.load(path)

    assert config.server.url == "https://portainer.example.com:9443"
    assert config.server.read_only is True
    assert config.server.log_level == "DEBUG"


def test_malformed_toml_is_a_startup_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[server\nurl = ", encoding="utf-8")

    with pytest.raises(StartupError) as exc_info:
        PortainerMCPConfig.load(path)

    assert exc_info.value.code == STARTUP_CODE_CONFIG
    assert "config init --force" in str(exc_info.value)


def test_unknown_log_level_in_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[server]\nlog_level = "LOUD"\n', encoding="utf-8")

    with pytest.raises(StartupError):
        PortainerMCPConfig.load(path)


def test_environment_overrides_file_values() -> None:
    config = PortainerMCPConfig(server=ServerConfig(url="https://file.example"))

    layered = config.with_environment(
        {"PORTAINER_MCP_SERVER_URL": "http://env.example/", "PORTAINER_MCP_TOKEN": "ptr_abc"}
    )

    assert layered.server.url == "http://env.example"
    assert layered.server.token == "ptr_abc"
    assert config.server.url == "https://file.example"


def test_empty_environment_leaves_config_untouched() -> None:
    config = PortainerMCPConfig(server=ServerConfig(url="https://file.example"))

    assert config.with_environment({}) is config


def test_overrides_skip_unset_values() -> None:
    config = PortainerMCPConfig(server=ServerConfig(url="https://file.example", read_only=True))

    layered = config.with_overrides(url=None, read_only=None, granular_tools=True)

    assert layered.server.url == "https://file.example"
    assert layered.server.read_only is True
    assert layered.server.granular_tools is True


def test_save_omits_token_by_default(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.toml"
    config = PortainerMCPConfig(
        server=ServerConfig(url="https://portainer.example", token="ptr_secret", read_only=True)
    )

    config.save(path)

    text = path.read_text(encoding="utf-8")
    assert "ptr_secret" not in text
    reloaded = PortainerMCPConfig.load(path)
    assert reloaded.server.url == "https://portainer.example"
    assert reloaded.server.read_only is True
    assert reloaded.server.token == ""


def test_save_can_persist_token(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    config = PortainerMCPConfig(server=ServerConfig(token="ptr_secret"))

    config.save(path, include_token=True)

    assert PortainerMCPConfig.load(path).server.token == "ptr_secret"


def test_token_is_hidden_from_repr() -> None:
    assert "ptr_secret" not in repr(ServerConfig(token="ptr_secret"))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://portainer.example/", "https://portainer.example"),
        ("portainer.example:9443", "https://portainer.example:9443"),
        ("http://10.0.0.5:9000", "http://10.0.0.5:9000"),
        ("  ", ""),
    ],
)
def test_normalize_server_url(raw: str, expected: str) -> None:
    assert normalize_server_url(raw) == expected


def test_normalize_log_level() -> None:
    assert normalize_log_level(" info ") == "INFO"
    with pytest.raises(ValueError, match="log_level must be one of"):
        normalize_log_level("verbose")
