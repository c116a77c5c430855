"""Pytest fixtures for portainer-mcp tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="portainer-mcp-tests-"))
os.environ["PORTAINER_MCP_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ.pop("PORTAINER_MCP_SERVER_URL", None)
os.environ.pop("PORTAINER_MCP_TOKEN", None)

from portainer_mcp.client.api import PortainerClient  # noqa: E402
from portainer_mcp.mcp.handlers import build_catalog  # noqa: E402
from portainer_mcp.mcp.schema import load_tools  # noqa: E402

if TYPE_CHECKING:
    from portainer_mcp.mcp.catalog import OperationCatalog
    from portainer_mcp.mcp.schema import ToolSpec


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def mock_client() -> AsyncMock:
    """Backend client double; every API method is an AsyncMock."""
    return AsyncMock(spec=PortainerClient)


@pytest.fixture
def catalog() -> OperationCatalog:
    return build_catalog()


@pytest.fixture(scope="session")
def tool_specs() -> dict[str, ToolSpec]:
    return load_tools()
