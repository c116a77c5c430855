"""Uniform success/error results for tool calls.

Building an envelope never raises: a payload that cannot be serialized
degrades to an error envelope describing why.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from portainer_mcp.core.errors import EnvelopeSerializationError


@dataclass(frozen=True, slots=True)
class ToolResult:
    text: str
    is_error: bool = False


def _to_jsonable(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    if isinstance(payload, list | tuple):
        return [_to_jsonable(item) for item in payload]
    return payload


def text_result(text: str) -> ToolResult:
    return ToolResult(text=text)


def error_result(error: BaseException | str) -> ToolResult:
    return ToolResult(text=str(error), is_error=True)


def json_result(payload: Any, error_message: str = "failed to marshal result") -> ToolResult:
    """Serialize *payload* to compact JSON.

    Pydantic models are dumped with their camelCase aliases. On failure the
    result is an error envelope prefixed with *error_message*.
    """
    try:
        text = json.dumps(_to_jsonable(payload))
    except (TypeError, ValueError) as exc:
        return error_result(EnvelopeSerializationError(error_message, exc))
    return text_result(text)
