"""Portainer MCP server: exposes the Portainer management API as MCP tools."""

from __future__ import annotations

__version__ = "0.5.1"

__all__ = ["__version__"]
