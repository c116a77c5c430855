"""Tool schema utilities."""

from __future__ import annotations

from pathlib import Path

import click

from portainer_mcp.core.errors import SchemaLoadError
from portainer_mcp.mcp.handlers import build_catalog
from portainer_mcp.mcp.schema import bundled_tools_text, load_tools


@click.group()
def tools() -> None:
    """Inspect and export the tool schema file."""
    pass


@tools.command()
@click.option(
    "--tools",
    "tools_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Schema file to validate (defaults to the bundled schema)",
)
def check(tools_path: Path | None) -> None:
    """Validate a schema file and report operations it does not cover."""
    try:
        specs = load_tools(tools_path)
    except SchemaLoadError as exc:
        raise click.ClickException(str(exc)) from exc

    catalog = build_catalog()
    missing = [name for name in catalog.names() if name not in specs]
    unknown = [name for name in specs if name not in catalog]
    click.echo(f"{len(specs)} tools defined, {len(catalog)} operations available")
    for name in missing:
        click.echo(f"  missing definition: {name}")
    for name in unknown:
        click.echo(f"  no handler: {name}")


@tools.command()
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def export(destination: Path, force: bool) -> None:
    """Write the bundled schema to DESTINATION for customization."""
    from portainer_mcp.core.config import atomic_write

    if destination.exists() and not force:
        raise click.ClickException(f"{destination} already exists (use --force to overwrite)")
    atomic_write(destination, bundled_tools_text())
    click.echo(f"Wrote {destination}")
