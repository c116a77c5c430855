"""FastMCP server setup for the Portainer MCP server.

The advertised tool surface is computed once at construction:

- meta-tool mode (default): one ``manage_*`` tool per domain with an
  ``action`` discriminator;
- granular mode: one tool per catalog operation.

Both modes route through the same :class:`Dispatcher`. Construction fails
before anything is served when the tool schema cannot be loaded or the
backend version is not supported.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent, Tool, ToolAnnotations

from portainer_mcp.client.api import PortainerClient
from portainer_mcp.client.errors import PortainerClientError
from portainer_mcp.core.constants import (
    ACTION_PARAMETER,
    SERVER_NAME,
    SERVER_VERSION,
    SUPPORTED_PORTAINER_VERSION,
)
from portainer_mcp.core.errors import (
    BackendUnavailableError,
    IncompatibleVersionError,
    StartupError,
)
from portainer_mcp.core.version import is_compatible_version, major_minor
from portainer_mcp.mcp.dispatch import Dispatcher
from portainer_mcp.mcp.handlers import build_catalog
from portainer_mcp.mcp.metatools import META_TOOLS
from portainer_mcp.mcp.schema import load_tools

if TYPE_CHECKING:
    from collections.abc import Mapping

    from portainer_mcp.core.config import ServerConfig
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.schema import ToolSpec

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ToolSurface:
    """Advertised tool definitions plus the routes the dispatcher needs for them."""

    tools: list[Tool] = field(default_factory=list)
    operations: set[str] = field(default_factory=set)
    meta_routes: dict[str, dict[str, str]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Tool surface
# ---------------------------------------------------------------------------


def build_meta_tools(
    catalog: OperationCatalog, specs: Mapping[str, ToolSpec], read_only: bool
) -> ToolSurface:
    """Group exposed operations behind the ``manage_*`` meta-tools."""
    exposed = catalog.filter_for_mode(read_only)
    surface = ToolSurface()
    for meta_tool in META_TOOLS:
        actions: dict[str, str] = {}
        properties: dict[str, Any] = {}
        for action in meta_tool.actions:
            if action.operation not in exposed:
                continue
            spec = specs.get(action.operation)
            if spec is None:
                logger.warning(
                    "Tool %s not found in schema; skipping action %s of %s",
                    action.operation,
                    action.name,
                    meta_tool.name,
                )
                continue
            actions[action.name] = action.operation
            for parameter in spec.parameters:
                properties.setdefault(parameter.name, parameter.json_schema())

        if not actions:
            logger.info("Meta-tool %s has no available actions; not registering", meta_tool.name)
            continue

        input_schema = {
            "type": "object",
            "properties": {
                ACTION_PARAMETER: {
                    "type": "string",
                    "description": "The action to perform",
                    "enum": list(actions),
                },
                **properties,
            },
            "required": [ACTION_PARAMETER],
        }
        surface.tools.append(
            Tool(
                name=meta_tool.name,
                description=meta_tool.description(list(actions)),
                inputSchema=input_schema,
                annotations=meta_tool.annotations(read_only),
            )
        )
        surface.meta_routes[meta_tool.name] = actions
    return surface


def build_granular_tools(
    catalog: OperationCatalog, specs: Mapping[str, ToolSpec], read_only: bool
) -> ToolSurface:
    """Advertise every exposed operation as its own tool."""
    exposed = catalog.filter_for_mode(read_only)
    surface = ToolSurface()
    for name in catalog.names():
        if name not in exposed:
            continue
        spec = specs.get(name)
        if spec is None:
            logger.warning("Tool %s not found in schema; skipping", name)
            continue
        annotations = spec.annotations.to_tool_annotations()
        if read_only:
            annotations = annotations.model_copy(update={"readOnlyHint": True})
        surface.tools.append(
            Tool(
                name=name,
                description=spec.description,
                inputSchema=spec.input_schema(),
                annotations=annotations,
            )
        )
        surface.operations.add(name)
    return surface


def _build_server_instructions(read_only: bool, granular: bool) -> str:
    """Build MCP server instructions tailored to the mode."""
    base = [
        "Portainer MCP server: manage Portainer environments, stacks, users, teams, "
        "registries, templates, backups, webhooks, edge jobs, settings, and "
        "Docker/Kubernetes resources.",
    ]
    if granular:
        base.append("Each operation is a separate tool named after the operation.")
    else:
        base.append(
            "Each manage_* tool groups related operations; "
            "set the 'action' parameter to the operation to run."
        )
    if read_only:
        base.extend(
            [
                "",
                "You are running in READ-ONLY mode.",
                "Only operations that do not modify Portainer are available.",
            ]
        )
    return "\n".join(base)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


class PortainerFastMCP(FastMCP):
    """FastMCP server whose tools come from the schema file instead of decorators."""

    def __init__(self, dispatcher: Dispatcher, tools: list[Tool], *, instructions: str) -> None:
        super().__init__(SERVER_NAME, instructions=instructions)
        self._mcp_server.version = SERVER_VERSION
        self._dispatcher = dispatcher
        self._tool_definitions = list(tools)

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def tool_definitions(self) -> list[Tool]:
        return list(self._tool_definitions)

    async def list_tools(self) -> list[Tool]:
        return self.tool_definitions

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Dispatch a tool call; error envelopes are raised so the transport flags them."""
        result = await self._dispatcher.dispatch(name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return [TextContent(type="text", text=result.text)]


async def check_backend_version(client: PortainerClient, *, disabled: bool = False) -> str | None:
    """Fail unless the backend's major.minor matches the supported release.

    Returns the reported version, or None when the check is disabled.
    """
    if disabled:
        logger.info("Portainer version check disabled")
        return None
    try:
        version = await client.get_version()
    except PortainerClientError as exc:
        raise BackendUnavailableError.because(str(exc)) from exc
    if not is_compatible_version(version, SUPPORTED_PORTAINER_VERSION):
        raise IncompatibleVersionError.for_versions(
            version, major_minor(SUPPORTED_PORTAINER_VERSION)
        )
    logger.info("Portainer server version %s is supported", version)
    return version


async def create_server(
    config: ServerConfig,
    client: PortainerClient,
    *,
    tools: Mapping[str, ToolSpec] | None = None,
) -> PortainerFastMCP:
    """Load the schema, run the version gate, and build the tool surface.

    Raises:
        SchemaLoadError: The tool schema file is unusable.
        BackendUnavailableError: The backend version could not be read.
        IncompatibleVersionError: The backend version is not supported.
    """
    specs = tools if tools is not None else load_tools(config.tools_path)
    await check_backend_version(client, disabled=config.disable_version_check)

    catalog = build_catalog()
    build_surface = build_granular_tools if config.granular_tools else build_meta_tools
    surface = build_surface(catalog, specs, config.read_only)
    dispatcher = Dispatcher(
        catalog,
        client,
        read_only=config.read_only,
        operations=surface.operations,
        meta_routes=surface.meta_routes,
    )
    logger.info(
        "Serving %d tools for %s (%s, %s)",
        len(surface.tools),
        config.url,
        "read-only" if config.read_only else "read-write",
        "granular" if config.granular_tools else "meta-tools",
    )
    return PortainerFastMCP(
        dispatcher,
        surface.tools,
        instructions=_build_server_instructions(config.read_only, config.granular_tools),
    )


def list_registered_tool_names(mcp: PortainerFastMCP) -> set[str]:
    """Return advertised tool names for contract tests and diagnostics."""
    return {tool.name for tool in mcp.tool_definitions}


def get_registered_tool_annotations(mcp: PortainerFastMCP) -> dict[str, ToolAnnotations | None]:
    """Return tool annotation metadata keyed by tool name."""
    return {tool.name: tool.annotations for tool in mcp.tool_definitions}


async def serve(config: ServerConfig) -> None:
    async with PortainerClient(
        config.url,
        config.token,
        skip_tls_verify=config.skip_tls_verify,
        timeout=config.timeout_seconds,
    ) as client:
        mcp = await create_server(config, client)
        await mcp.run_stdio_async()


def main(config: ServerConfig) -> None:
    """Entry point for ``portainer-mcp serve``."""
    try:
        asyncio.run(serve(config))
    except StartupError as exc:
        raise SystemExit(str(exc)) from exc
