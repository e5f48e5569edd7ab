"""Pytest configuration and shared fixtures for mcp-mem0 tests.

This module provides reusable fixtures for testing:
- env_setup: (autouse) Sets MEM0_* environment variables
- mock_client: Stand-in for mem0.AsyncMemoryClient
- store: Mem0Store wired to mock_client
- mock_store: Mem0Store double for router tests

Usage:
    async def test_something(store, mock_client):
        await store.delete_memory("mem-1", "alice")
        mock_client.delete.assert_awaited_once_with("mem-1")
"""

import os
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from mem0 import AsyncMemoryClient

from mcp_mem0.storage import Mem0Store

# Configure pytest-asyncio
pytest_plugins = ["pytest_asyncio"]


@pytest.fixture(autouse=True)
def env_setup() -> Generator[None, None, None]:
    """Set MEM0_* environment variables for every test.

    MEM0_USER_ID is removed so each test starts from the fallback user id.
    """
    env_vars = {
        "MEM0_API_KEY": "test-api-key",
        "MEM0_LOG_LEVEL": "INFO",
    }
    removed = ["MEM0_USER_ID"]

    original = {k: os.environ.get(k) for k in [*env_vars, *removed]}
    os.environ.update(env_vars)
    for key in removed:
        os.environ.pop(key, None)
    yield
    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock Mem0 AsyncMemoryClient.

    Defaults: add returns an id, search returns no hits, update and
    delete succeed. Spec'd on AsyncMemoryClient, so calls to methods the
    client does not have fail.
    """
    client = MagicMock(spec=AsyncMemoryClient)
    client.add = AsyncMock(return_value={"id": "mem-new"})
    client.search = AsyncMock(return_value=[])
    client.update = AsyncMock(return_value={"message": "Memory updated successfully!"})
    client.delete = AsyncMock(return_value={"message": "Memory deleted successfully!"})
    return client


@pytest.fixture
def store(mock_client: MagicMock) -> Mem0Store:
    """Mem0Store backed by mock_client."""
    return Mem0Store(api_key="test-api-key", client=mock_client)


@pytest.fixture
def mock_store() -> MagicMock:
    """Mem0Store double; its async methods are AsyncMocks via spec."""
    return MagicMock(spec=Mem0Store)
