"""Tool schema file (``tools.yaml``): argument shapes and descriptions per operation.

The file is loaded once at startup. Anything wrong with it is a
:class:`SchemaLoadError`, which aborts server construction.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from mcp.types import ToolAnnotations
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from portainer_mcp.core.config import atomic_write
from portainer_mcp.core.constants import MINIMUM_TOOLS_VERSION
from portainer_mcp.core.errors import SchemaLoadError
from portainer_mcp.core.version import parse_tools_version

logger = logging.getLogger(__name__)

BUNDLED_TOOLS_RESOURCE = "tools.yaml"

ParameterType = Literal["string", "number", "boolean", "array", "object"]


class ParameterSpec(BaseModel):
    name: str = Field(min_length=1)
    type: ParameterType
    description: str = ""
    required: bool = False
    enum: list[str] | None = None
    items: dict[str, Any] | None = None

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.items is not None:
            schema["items"] = self.items
        return schema


class AnnotationSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    read_only_hint: bool = Field(default=False, alias="readOnlyHint")
    destructive_hint: bool = Field(default=False, alias="destructiveHint")
    idempotent_hint: bool = Field(default=False, alias="idempotentHint")
    open_world_hint: bool = Field(default=False, alias="openWorldHint")

    def to_tool_annotations(self) -> ToolAnnotations:
        return ToolAnnotations(
            title=self.title or None,
            readOnlyHint=self.read_only_hint,
            destructiveHint=self.destructive_hint,
            idempotentHint=self.idempotent_hint,
            openWorldHint=self.open_world_hint,
        )


class ToolSpec(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    parameters: list[ParameterSpec] = Field(default_factory=list)
    annotations: AnnotationSpec = Field(default_factory=AnnotationSpec)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema object for this tool's arguments."""
        return {
            "type": "object",
            "properties": {param.name: param.json_schema() for param in self.parameters},
            "required": [param.name for param in self.parameters if param.required],
        }


class ToolsFile(BaseModel):
    version: str
    tools: list[ToolSpec] = Field(default_factory=list)


def bundled_tools_text() -> str:
    return (
        resources.files("portainer_mcp.mcp")
        .joinpath(BUNDLED_TOOLS_RESOURCE)
        .read_text(encoding="utf-8")
    )


def ensure_tools_file(path: Path) -> bool:
    """Write the bundled schema to *path* unless a file is already there.

    Returns True when the file already existed.
    """
    if path.exists():
        return True
    try:
        atomic_write(path, bundled_tools_text())
    except OSError as exc:
        raise SchemaLoadError.because(path, f"cannot write default tool schema: {exc}") from exc
    logger.info("Wrote default tool schema to %s", path)
    return False


def _check_version(source: object, version: str) -> None:
    parsed = parse_tools_version(version)
    if parsed is None:
        raise SchemaLoadError.because(
            source, f"invalid version {version!r}, expected format v<major>.<minor>"
        )
    minimum = parse_tools_version(MINIMUM_TOOLS_VERSION)
    if minimum is not None and parsed < minimum:
        raise SchemaLoadError.because(
            source,
            f"tools file version {version} is older than the minimum supported "
            f"version {MINIMUM_TOOLS_VERSION}",
        )


def parse_tools(text: str, source: object = "<bundled>") -> dict[str, ToolSpec]:
    """Parse and validate schema text into ``{tool name: ToolSpec}``, preserving order."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaLoadError.because(source, f"invalid YAML: {exc}") from exc
    if not isinstance(document, dict):
        raise SchemaLoadError.because(source, "top level must be a mapping")

    version = document.get("version")
    if not isinstance(version, str) or not version:
        raise SchemaLoadError.because(source, "missing version")
    _check_version(source, version)

    try:
        tools_file = ToolsFile.model_validate(document)
    except PydanticValidationError as exc:
        raise SchemaLoadError.because(source, f"invalid tool definition: {exc}") from exc

    tools: dict[str, ToolSpec] = {}
    for tool in tools_file.tools:
        if tool.name in tools:
            raise SchemaLoadError.because(source, f"duplicate tool name {tool.name!r}")
        tools[tool.name] = tool
    return tools


def load_tools(path: Path | None = None) -> dict[str, ToolSpec]:
    """Load the schema from *path*, or the bundled file when *path* is None."""
    if path is None:
        return parse_tools(bundled_tools_text())
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError.because(path, str(exc)) from exc
    return parse_tools(text, path)
