"""Error taxonomy for startup failures and per-request tool failures.

Startup errors abort server construction. Operation errors never leave the
dispatcher: they are rendered into error envelopes for the calling agent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

STARTUP_CODE_INCOMPATIBLE_VERSION: Final = "INCOMPATIBLE_VERSION"
STARTUP_CODE_SCHEMA_LOAD: Final = "SCHEMA_LOAD_FAILED"
STARTUP_CODE_BACKEND_UNAVAILABLE: Final = "BACKEND_UNAVAILABLE"
STARTUP_CODE_CONFIG: Final = "INVALID_CONFIG"


# ---------------------------------------------------------------------------
# Construction-time errors
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StartupError(RuntimeError):
    """Structured fatal error raised before any request is served."""

    code: str
    message: str
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"[{self.code}] {self.message} Hint: {self.hint}"
        return f"[{self.code}] {self.message}"

    def as_dict(self) -> dict[str, str]:
        return {
            "code": self.code,
            "message": self.message,
            "hint": self.hint,
        }


@dataclass(frozen=True, slots=True)
class IncompatibleVersionError(StartupError):
    """Backend major.minor differs from the supported one."""

    @classmethod
    def for_versions(cls, actual: str, supported: str) -> IncompatibleVersionError:
        return cls(
            code=STARTUP_CODE_INCOMPATIBLE_VERSION,
            message=(
                f"unsupported Portainer server version: {actual}, "
                f"only version {supported}.x is supported"
            ),
            hint="Use --disable-version-check to connect to an unverified Portainer version.",
        )


@dataclass(frozen=True, slots=True)
class SchemaLoadError(StartupError):
    """Tool schema file is missing, malformed, or too old."""

    @classmethod
    def because(cls, path: object, reason: str) -> SchemaLoadError:
        return cls(
            code=STARTUP_CODE_SCHEMA_LOAD,
            message=f"failed to load tools from {path}: {reason}",
            hint="Point --tools at a valid tools.yaml or omit it to use the bundled file.",
        )


@dataclass(frozen=True, slots=True)
class BackendUnavailableError(StartupError):
    """Backend could not be queried during startup."""

    @classmethod
    def because(cls, reason: str) -> BackendUnavailableError:
        return cls(
            code=STARTUP_CODE_BACKEND_UNAVAILABLE,
            message=f"failed to get Portainer server version: {reason}",
            hint="Check --server-url, --token and TLS settings.",
        )


# ---------------------------------------------------------------------------
# Per-request errors
# ---------------------------------------------------------------------------


class OperationError(Exception):
    """Failure of a single tool call, rendered as ``<message>: <cause>``."""

    def __init__(self, message: str, cause: BaseException | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class ParameterError(OperationError):
    """Required argument missing or argument of the wrong shape."""


class ValidationError(OperationError):
    """Well-typed argument that violates a domain rule."""


class BackendError(OperationError):
    """Backend call failed; message carries the attempted operation."""


class EnvelopeSerializationError(OperationError):
    """Successful result that could not be serialized."""


class DispatchInvariantError(OperationError):
    """State the permission filter should have made unreachable."""
