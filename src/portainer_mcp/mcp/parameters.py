"""Typed argument extraction and domain validators for tool handlers.

Extraction failures raise :class:`ParameterError` ("invalid <name> parameter");
rule violations on well-typed values raise :class:`ValidationError`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final
from urllib.parse import urlparse

import yaml

from portainer_mcp.client.models import AccessLevel, UserRole
from portainer_mcp.core.errors import ParameterError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

HTTP_METHODS: Final = ("GET", "POST", "PUT", "DELETE", "HEAD", "PATCH")
REGISTRY_TYPES: Final = range(1, 8)
TEMPLATE_TYPES: Final = range(1, 4)
TEMPLATE_PLATFORMS: Final = range(1, 3)
WEBHOOK_TYPES: Final = range(1, 3)
CRON_FIELD_COUNT: Final = 5


class ParameterParser:
    """Reads typed values out of an untyped tool argument map.

    Absent optional arguments come back as the zero value of their kind.
    Arguments nobody asks for are ignored.
    """

    def __init__(self, arguments: Mapping[str, Any] | None = None) -> None:
        self._arguments: dict[str, Any] = dict(arguments or {})

    def has(self, name: str) -> bool:
        return self._arguments.get(name) is not None

    def _raw(self, name: str, required: bool) -> Any:
        value = self._arguments.get(name)
        if value is None and required:
            raise ParameterError(f"invalid {name} parameter", f"{name} is required")
        return value

    @staticmethod
    def _mismatch(name: str, kind: str) -> ParameterError:
        return ParameterError(f"invalid {name} parameter", f"{name} must be {kind}")

    def get_string(self, name: str, required: bool = False) -> str:
        value = self._raw(name, required)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise self._mismatch(name, "a string")
        return value

    def get_int(self, name: str, required: bool = False) -> int:
        value = self._raw(name, required)
        if value is None:
            return 0
        # JSON numbers arrive as float when the client encodes 3 as 3.0.
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise self._mismatch(name, "a number")
        if isinstance(value, float):
            if not value.is_integer():
                raise self._mismatch(name, "an integer")
            return int(value)
        return value

    def get_bool(self, name: str, required: bool = False) -> bool:
        value = self._raw(name, required)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise self._mismatch(name, "a boolean")
        return value

    def get_int_array(self, name: str, required: bool = False) -> list[int]:
        value = self._raw(name, required)
        if value is None:
            return []
        if not isinstance(value, list):
            raise self._mismatch(name, "an array")
        result: list[int] = []
        for item in value:
            if isinstance(item, bool) or not isinstance(item, int | float):
                raise self._mismatch(name, "an array of numbers")
            if isinstance(item, float) and not item.is_integer():
                raise self._mismatch(name, "an array of integers")
            result.append(int(item))
        return result

    def get_id(self, name: str = "id") -> int:
        """Required, positive resource ID."""
        return validate_positive_id(name, self.get_int(name, required=True))

    def get_object_array(self, name: str, required: bool = False) -> list[dict[str, Any]]:
        value = self._raw(name, required)
        if value is None:
            return []
        if not isinstance(value, list):
            raise self._mismatch(name, "an array")
        for item in value:
            if not isinstance(item, dict):
                raise self._mismatch(name, "an array of objects")
        return value


# ---------------------------------------------------------------------------
# Domain validators
# ---------------------------------------------------------------------------


def validate_name(value: str, field: str = "name") -> str:
    if not value.strip():
        raise ValidationError(f"{field} cannot be empty or whitespace-only")
    return value


def validate_positive_id(name: str, value: int) -> int:
    if value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value}")
    return value


def validate_user_role(role: str) -> str:
    allowed = [member.value for member in UserRole]
    if role not in allowed:
        raise ValidationError(f"invalid role {role}: must be one of: {', '.join(allowed)}")
    return role


def validate_http_method(method: str) -> str:
    if method not in HTTP_METHODS:
        raise ValidationError(f"invalid method: {method}")
    return method


def validate_api_path(name: str, path: str) -> str:
    if not path.startswith("/"):
        raise ValidationError(f"{name} must start with a leading slash")
    return path


def validate_int_choice(name: str, value: int, allowed: range, hint: str) -> int:
    if value not in allowed:
        raise ValidationError(f"invalid {name}: {value} ({hint})")
    return value


def validate_url(name: str, value: str) -> str:
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(f"invalid {name}", f"{value!r} is not an absolute URL")
    return value


def validate_cron_expression(expression: str) -> str:
    fields = expression.split()
    if len(fields) != CRON_FIELD_COUNT:
        raise ValidationError(
            "invalid cronExpression",
            f"expected {CRON_FIELD_COUNT} fields, got {len(fields)}",
        )
    return expression


def validate_compose_file(content: str) -> str:
    """A compose file must be a YAML mapping with a non-empty ``services`` mapping."""
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ValidationError("invalid compose file", f"invalid YAML: {exc}") from exc
    if not isinstance(document, dict):
        raise ValidationError("invalid compose file", "top level must be a mapping")
    services = document.get("services")
    if not isinstance(services, dict) or not services:
        raise ValidationError("invalid compose file", "services must be a non-empty mapping")
    return content


def parse_json_object(name: str, value: str) -> dict[str, Any]:
    try:
        document = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"failed to parse {name} JSON", exc) from exc
    if not isinstance(document, dict):
        raise ValidationError(f"failed to parse {name} JSON", "expected a JSON object")
    return document


def parse_access_map(entries: list[dict[str, Any]], label: str) -> dict[int, str]:
    """Turn ``[{"id": 1, "access": "standard_user"}]`` into ``{1: "standard_user"}``."""
    levels = {member.value for member in AccessLevel}
    result: dict[int, str] = {}
    for entry in entries:
        subject_id = entry.get("id")
        if isinstance(subject_id, bool) or not isinstance(subject_id, int | float):
            raise ValidationError(f"invalid {label}", f"invalid ID: {subject_id}")
        access = entry.get("access")
        if not isinstance(access, str):
            raise ValidationError(f"invalid {label}", f"invalid access: {access}")
        if access not in levels:
            raise ValidationError(f"invalid {label}", f"invalid access level: {access}")
        result[int(subject_id)] = access
    return result


def parse_key_value_map(entries: list[dict[str, Any]], label: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for entry in entries:
        key = entry.get("key")
        if not isinstance(key, str):
            raise ValidationError(f"invalid {label}", f"invalid key: {key}")
        value = entry.get("value")
        if not isinstance(value, str):
            raise ValidationError(f"invalid {label}", f"invalid value: {value}")
        result[key] = value
    return result
