"""Operation catalog: every fine-grained backend operation and its permission."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.envelope import ToolResult
    from portainer_mcp.mcp.parameters import ParameterParser

Handler: TypeAlias = "Callable[[PortainerClient, ParameterParser], Awaitable[ToolResult]]"


class Permission(StrEnum):
    READ_ONLY_SAFE = "read_only_safe"
    WRITE_REQUIRED = "write_required"


@dataclass(frozen=True, slots=True)
class Operation:
    name: str
    permission: Permission
    invoke: Handler

    @property
    def read_only_safe(self) -> bool:
        return self.permission is Permission.READ_ONLY_SAFE


class OperationCatalog:
    """Name-keyed operation table, built once at startup and then frozen."""

    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}
        self._frozen = False

    def register(self, name: str, handler: Handler, permission: Permission) -> None:
        if self._frozen:
            raise RuntimeError(f"operation catalog is frozen; cannot register {name!r}")
        if name in self._operations:
            raise ValueError(f"operation {name!r} is already registered")
        self._operations[name] = Operation(name=name, permission=permission, invoke=handler)

    def freeze(self) -> OperationCatalog:
        self._frozen = True
        return self

    def get(self, name: str) -> Operation | None:
        return self._operations.get(name)

    def filter_for_mode(self, read_only: bool) -> frozenset[str]:
        """Names exposed in the given mode: everything, or only read-only-safe entries."""
        return frozenset(
            name
            for name, operation in self._operations.items()
            if not read_only or operation.read_only_safe
        )

    def names(self) -> list[str]:
        return list(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)
