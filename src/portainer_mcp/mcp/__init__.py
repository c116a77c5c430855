"""MCP server entry point for Portainer."""

from __future__ import annotations

from portainer_mcp.mcp.server import create_server, main

__all__ = ["create_server", "main"]
