"""Version string helpers for the backend compatibility gate."""

from __future__ import annotations

import re

_TOOLS_VERSION_RE = re.compile(r"^v(\d+)\.(\d+)$")


def major_minor(version: str) -> str:
    """Return the ``major.minor`` prefix of *version*.

    Inputs with fewer than two dot-separated components are returned unchanged.
    """
    parts = version.split(".", 2)
    if len(parts) < 2:
        return version
    return f"{parts[0]}.{parts[1]}"


def is_compatible_version(actual: str, supported: str) -> bool:
    """Patch releases are always compatible; major.minor must match exactly."""
    return major_minor(actual) == major_minor(supported)


def parse_tools_version(value: str) -> tuple[int, int] | None:
    """Parse a ``v<major>.<minor>`` tool schema version, or None if malformed."""
    match = _TOOLS_VERSION_RE.match(value.strip())
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))
