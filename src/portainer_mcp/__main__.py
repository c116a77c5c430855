"""CLI entry point for portainer-mcp."""

from __future__ import annotations

from portainer_mcp.cli.commands.root import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
