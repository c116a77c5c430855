"""Root CLI command registration."""

from __future__ import annotations

from importlib.metadata import version

import click

__version__ = version("portainer-mcp")
from portainer_mcp.cli.tools import tools

from .config import config
from .serve import serve


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """MCP server exposing a Portainer instance to AI assistants."""
    if version:
        click.echo(f"portainer-mcp {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(serve)
cli.add_command(config)
cli.add_command(tools)
