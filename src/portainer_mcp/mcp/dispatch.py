"""Request dispatch: tool name (+ action) -> operation -> handler -> envelope.

Every request resolves to exactly one catalog operation and at most one
handler invocation. Failures never escape :meth:`Dispatcher.dispatch`; they
come back as error envelopes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from portainer_mcp.client.errors import PortainerClientError
from portainer_mcp.core.constants import ACTION_PARAMETER
from portainer_mcp.core.errors import (
    BackendError,
    DispatchInvariantError,
    OperationError,
    ParameterError,
)
from portainer_mcp.mcp.envelope import ToolResult, error_result
from portainer_mcp.mcp.parameters import ParameterParser

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping
    from types import TracebackType

    from portainer_mcp.client.api import PortainerClient
    from portainer_mcp.mcp.catalog import Operation, OperationCatalog

logger = logging.getLogger(__name__)


class backend_call:
    """Re-raise backend client failures as :class:`BackendError` prefixed with *message*.

    Usage::

        with backend_call("failed to get environment"):
            environment = await client.get_environment(environment_id)
    """

    __slots__ = ("message",)

    def __init__(self, message: str) -> None:
        self.message = message

    def __enter__(self) -> backend_call:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if isinstance(exc, PortainerClientError):
            raise BackendError(self.message, exc) from exc
        return False


class Dispatcher:
    """Routes tool calls onto catalog operations.

    Args:
        catalog: Frozen operation catalog.
        client: Backend collaborator handed to every handler.
        read_only: Permission mode the routes were built for.
        operations: Operation names callable directly as tools (granular mode).
        meta_routes: Meta-tool name -> {action name: operation name}, holding only
            the actions exposed in this mode.
    """

    def __init__(
        self,
        catalog: OperationCatalog,
        client: PortainerClient,
        *,
        read_only: bool,
        operations: Collection[str] = (),
        meta_routes: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self._catalog = catalog
        self._client = client
        self._read_only = read_only
        self._operations = frozenset(operations)
        self._meta_routes = {name: dict(actions) for name, actions in (meta_routes or {}).items()}

    @property
    def read_only(self) -> bool:
        return self._read_only

    def tool_names(self) -> set[str]:
        return set(self._operations) | set(self._meta_routes)

    def _resolve_action(self, tool_name: str, arguments: Mapping[str, Any]) -> str:
        action = arguments.get(ACTION_PARAMETER)
        if action is None:
            raise ParameterError(
                f"invalid {ACTION_PARAMETER} parameter", f"{ACTION_PARAMETER} is required"
            )
        if not isinstance(action, str):
            raise ParameterError(
                f"invalid {ACTION_PARAMETER} parameter", f"{ACTION_PARAMETER} must be a string"
            )
        operation_name = self._meta_routes[tool_name].get(action)
        if operation_name is None:
            available = ", ".join(self._meta_routes[tool_name])
            raise ParameterError(
                f"invalid {ACTION_PARAMETER} parameter",
                f"unknown action {action!r} for {tool_name} (available: {available})",
            )
        return operation_name

    def resolve(self, tool_name: str, arguments: Mapping[str, Any]) -> Operation:
        """Map a tool call onto its catalog operation without invoking it."""
        if tool_name in self._meta_routes:
            operation_name = self._resolve_action(tool_name, arguments)
        elif tool_name in self._operations:
            operation_name = tool_name
        else:
            raise ParameterError("unknown tool", tool_name)

        operation = self._catalog.get(operation_name)
        if operation is None:
            raise DispatchInvariantError(
                "operation routed but not registered", operation_name
            )
        if self._read_only and not operation.read_only_safe:
            raise DispatchInvariantError(
                "write operation reachable in read-only mode", operation_name
            )
        return operation

    async def dispatch(self, tool_name: str, arguments: Mapping[str, Any] | None) -> ToolResult:
        arguments = arguments or {}
        try:
            operation = self.resolve(tool_name, arguments)
            logger.debug(
                "Dispatching tool=%s action=%s operation=%s",
                tool_name,
                arguments.get(ACTION_PARAMETER) if tool_name in self._meta_routes else None,
                operation.name,
            )
            return await operation.invoke(self._client, ParameterParser(arguments))
        except DispatchInvariantError as exc:
            logger.error("Dispatch invariant violated for %s: %s", tool_name, exc)
            return error_result(exc)
        except OperationError as exc:
            return error_result(exc)
        except Exception as exc:
            logger.exception("Unexpected failure in tool %s", tool_name)
            return error_result(f"internal error: {exc}")
