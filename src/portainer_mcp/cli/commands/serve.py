"""MCP server command."""

from __future__ import annotations

from pathlib import Path

import click

from portainer_mcp.core.config import PortainerMCPConfig, normalize_log_level
from portainer_mcp.core.constants import ENV_SERVER_URL, ENV_TOKEN
from portainer_mcp.core.errors import StartupError
from portainer_mcp.core.log import configure_logging


def _validate_log_level(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> str | None:
    if value is None:
        return None
    try:
        return normalize_log_level(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command()
@click.option("--server-url", default=None, help=f"Portainer server URL (or ${ENV_SERVER_URL})")
@click.option("--token", default=None, help=f"Portainer API token (or ${ENV_TOKEN})")
@click.option(
    "--tools",
    "tools_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tool schema YAML file; the bundled schema is written there if it does not exist",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (defaults to the user config directory)",
)
@click.option("--read-only", is_flag=True, help="Expose only read-only operations")
@click.option(
    "--granular-tools",
    is_flag=True,
    help="Advertise every operation as its own tool instead of grouped meta-tools",
)
@click.option(
    "--disable-version-check",
    is_flag=True,
    help="Connect to Portainer versions this server has not been verified against",
)
@click.option(
    "--skip-tls-verify",
    is_flag=True,
    help="Do not verify the Portainer TLS certificate",
)
@click.option(
    "--log-level",
    default=None,
    callback=_validate_log_level,
    help="Logging level written to stderr (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
def serve(
    server_url: str | None,
    token: str | None,
    tools_path: Path | None,
    config_path: Path | None,
    read_only: bool,
    granular_tools: bool,
    disable_version_check: bool,
    skip_tls_verify: bool,
    log_level: str | None,
) -> None:
    """Run the MCP server (STDIO transport).

    Settings are merged from the config file, environment variables and
    these flags, in increasing order of precedence.
    """
    try:
        config = (
            PortainerMCPConfig.load(config_path)
            .with_environment()
            .with_overrides(
                url=server_url,
                token=token,
                tools_path=tools_path,
                read_only=read_only or None,
                granular_tools=granular_tools or None,
                disable_version_check=disable_version_check or None,
                skip_tls_verify=skip_tls_verify or None,
                log_level=log_level,
            )
        )
    except StartupError as exc:
        raise click.ClickException(str(exc)) from exc

    server_config = config.server
    if not server_config.url:
        raise click.UsageError(f"--server-url is required (or set {ENV_SERVER_URL})")
    if not server_config.token:
        raise click.UsageError(f"--token is required (or set {ENV_TOKEN})")

    configure_logging(server_config.log_level)

    from portainer_mcp.mcp.schema import ensure_tools_file
    from portainer_mcp.mcp.server import main as mcp_main

    if server_config.tools_path is not None:
        try:
            ensure_tools_file(server_config.tools_path)
        except StartupError as exc:
            raise click.ClickException(str(exc)) from exc

    mcp_main(server_config)
