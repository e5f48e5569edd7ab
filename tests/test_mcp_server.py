"""Tests for the mcp-mem0 MCP server.

This module tests the server wiring:
- Handler registration and advertised capabilities
- tools/list and tools/call through the registered request handlers
- Argument validation against the catalog schemas before dispatch
- ClientLogNotifier best-effort behaviour

Handlers are invoked directly, without a transport.
"""

from unittest.mock import AsyncMock, MagicMock

import mcp.types as types
import pytest
from mcp.server.lowlevel import Server

from mcp_mem0.mcp_server import ClientLogNotifier, create_server
from mcp_mem0.tools import MemoryTools
from mcp_mem0.types import AddResult, MutationResult


@pytest.fixture
def server(mock_store: MagicMock) -> Server:
    mock_store.add_memory.return_value = AddResult(success=True, id="mem-1")
    mock_store.delete_memory.return_value = MutationResult(success=True)
    return create_server(MemoryTools(store=mock_store, default_user_id="alice"))


async def _call(server: Server, name: str, arguments: dict) -> types.CallToolResult:
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    response = await server.request_handlers[types.CallToolRequest](request)
    return response.root


class TestServerRegistration:
    """Tests for create_server."""

    def test_registers_handlers(self, server) -> None:
        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers
        assert types.SetLevelRequest in server.request_handlers

    def test_capabilities(self, server) -> None:
        """Test that tools and logging capabilities are advertised."""
        options = server.create_initialization_options()

        assert options.server_name == "mcp-mem0"
        assert options.capabilities.tools is not None
        assert options.capabilities.logging is not None

    @pytest.mark.asyncio
    async def test_list_tools(self, server) -> None:
        response = await server.request_handlers[types.ListToolsRequest](
            types.ListToolsRequest(method="tools/list")
        )

        assert [tool.name for tool in response.root.tools] == [
            "memory_add",
            "memory_search",
            "memory_update",
            "memory_delete",
        ]


class TestCallTool:
    """Tests for tools/call dispatch."""

    @pytest.mark.asyncio
    async def test_call_add(self, server, mock_store) -> None:
        result = await _call(server, "memory_add", {"content": "Use uv"})

        assert result.isError is False
        assert result.content[0].text == "Memory added successfully with ID: mem-1"
        mock_store.add_memory.assert_awaited_once_with("Use uv", "alice", None)

    @pytest.mark.asyncio
    async def test_schema_violation_is_rejected_before_dispatch(self, server, mock_store) -> None:
        """Test that the catalog schema is enforced by the server."""
        result = await _call(server, "memory_add", {"text": "wrong field"})

        assert result.isError is True
        mock_store.add_memory.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_tool(self, server) -> None:
        result = await _call(server, "memory_teleport", {})

        assert result.isError is True
        assert "memory_teleport" in result.content[0].text

    @pytest.mark.asyncio
    async def test_delete_without_confirmation(self, server, mock_store) -> None:
        result = await _call(server, "memory_delete", {"memory_id": "mem-1"})

        assert result.isError is True
        mock_store.delete_memory.assert_not_called()


class TestClientLogNotifier:
    """Tests for best-effort client log notifications."""

    @staticmethod
    def _server_with_session() -> MagicMock:
        server = MagicMock()
        server.request_context.session.send_log_message = AsyncMock()
        return server

    @pytest.mark.asyncio
    async def test_sends_at_or_above_level(self) -> None:
        server = self._server_with_session()
        notifier = ClientLogNotifier(server, level="info")

        await notifier.notify("warning", {"tool": "memory_add"})

        server.request_context.session.send_log_message.assert_awaited_once_with(
            level="warning", data={"tool": "memory_add"}, logger="mcp-mem0"
        )

    @pytest.mark.asyncio
    async def test_skips_below_level(self) -> None:
        server = self._server_with_session()
        notifier = ClientLogNotifier(server, level="warning")

        await notifier.notify("debug", "ignored")

        server.request_context.session.send_log_message.assert_not_called()

    def test_enabled_for(self) -> None:
        notifier = ClientLogNotifier(MagicMock(), level="error")

        assert notifier.enabled_for("critical") is True
        assert notifier.enabled_for("error") is True
        assert notifier.enabled_for("warning") is False

    @pytest.mark.asyncio
    async def test_outside_request_is_ignored(self) -> None:
        """Test that a missing request context does not raise."""
        notifier = ClientLogNotifier(Server("test"))

        await notifier.notify("error", "no session")

    @pytest.mark.asyncio
    async def test_send_failure_is_ignored(self) -> None:
        server = self._server_with_session()
        server.request_context.session.send_log_message.side_effect = RuntimeError("closed")
        notifier = ClientLogNotifier(server)

        await notifier.notify("error", "boom")
