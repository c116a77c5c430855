"""Configuration file commands."""

from __future__ import annotations

from pathlib import Path

import click

from portainer_mcp.core.config import PortainerMCPConfig, normalize_server_url
from portainer_mcp.core.constants import ENV_TOKEN
from portainer_mcp.core.errors import StartupError
from portainer_mcp.core.paths import get_config_path


@click.group()
def config() -> None:
    """Manage the portainer-mcp configuration file."""
    pass


@config.command()
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (defaults to the user config directory)",
)
@click.option("--server-url", default=None, help="Portainer server URL to store")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(config_path: Path | None, server_url: str | None, force: bool) -> None:
    """Write a starter configuration file.

    The API token is never written; pass it with --token or $PORTAINER_MCP_TOKEN.
    """
    path = config_path or get_config_path()
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")

    settings = PortainerMCPConfig()
    if server_url:
        settings = settings.with_overrides(url=normalize_server_url(server_url))
    settings.save(path)
    click.echo(f"Wrote {path}")
    click.echo(f"Set {ENV_TOKEN} or pass --token when running 'portainer-mcp serve'.")


@config.command()
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file to show (defaults to the user config directory)",
)
def show(config_path: Path | None) -> None:
    """Print the effective configuration with the token masked."""
    try:
        settings = PortainerMCPConfig.load(config_path).with_environment()
    except StartupError as exc:
        raise click.ClickException(str(exc)) from exc

    server = settings.server
    click.echo(f"url = {server.url or '(not set)'}")
    click.echo(f"token = {'(set)' if server.token else '(not set)'}")
    click.echo(f"tools_path = {server.tools_path or '(bundled)'}")
    click.echo(f"read_only = {server.read_only}")
    click.echo(f"granular_tools = {server.granular_tools}")
    click.echo(f"disable_version_check = {server.disable_version_check}")
    click.echo(f"skip_tls_verify = {server.skip_tls_verify}")
    click.echo(f"timeout_seconds = {server.timeout_seconds}")
    click.echo(f"log_level = {server.log_level}")
