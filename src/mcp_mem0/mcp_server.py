"""mcp-mem0 MCP server module.

This module binds MemoryTools to an MCP low-level Server:
- tools/list returns the tool catalog
- tools/call dispatches to MemoryTools.invoke
- logging/setLevel sets the threshold for client log notifications

Uses the low-level Server: the catalog declares its JSON schemas explicitly
and the server validates arguments against them before dispatch.

CRITICAL: MCP servers using stdio transport must NEVER write to stdout
as it corrupts JSON-RPC messages. All logging goes to stderr.
"""

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from mcp_mem0 import __version__
from mcp_mem0.constants import SERVER_NAME
from mcp_mem0.tools import MemoryTools

# MCP servers must never write to stdout (corrupts JSON-RPC)
logger = logging.getLogger(__name__)

# Syslog severities, lowest first (RFC 5424 order used by MCP)
LOG_LEVEL_ORDER: tuple[str, ...] = (
    "debug",
    "info",
    "notice",
    "warning",
    "error",
    "critical",
    "alert",
    "emergency",
)


class ClientLogNotifier:
    """Best-effort log notifications to the connected MCP client.

    This is a secondary channel next to the stderr log. Notifications are
    only sent while a request is being handled and only at or above the
    level the client asked for. Any failure to send is non-fatal: it is
    logged at DEBUG and otherwise ignored.

    Args:
        server: Server whose current request session carries the messages
        level: Initial threshold (default "info")
    """

    def __init__(self, server: Server, level: types.LoggingLevel = "info"):
        self._server = server
        self.level: types.LoggingLevel = level

    def enabled_for(self, level: types.LoggingLevel) -> bool:
        return LOG_LEVEL_ORDER.index(level) >= LOG_LEVEL_ORDER.index(self.level)

    async def notify(self, level: types.LoggingLevel, data: Any) -> None:
        if not self.enabled_for(level):
            return
        try:
            session = self._server.request_context.session
            await session.send_log_message(level=level, data=data, logger=SERVER_NAME)
        except Exception as e:
            logger.debug(f"Client log notification skipped: {e}")


def _result_text(result: types.CallToolResult) -> str:
    for item in result.content:
        if isinstance(item, types.TextContent):
            return item.text
    return ""


def create_server(memory_tools: MemoryTools) -> Server:
    """Create the MCP server and register its handlers.

    Args:
        memory_tools: Router handling every tool call

    Returns:
        Configured low-level Server, ready for run()
    """
    server: Server = Server(SERVER_NAME, version=__version__)
    notifier = ClientLogNotifier(server)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return memory_tools.list_operations()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        logger.debug(f"Tool call: {name}")
        await notifier.notify("debug", {"tool": name})

        result = await memory_tools.invoke(name, arguments)

        if result.isError:
            message = _result_text(result)
            logger.warning(f"Tool {name} returned an error: {message}")
            await notifier.notify("warning", {"tool": name, "error": message})
        return result

    @server.set_logging_level()
    async def handle_set_logging_level(level: types.LoggingLevel) -> None:
        logger.info(f"Client log level set to {level}")
        notifier.level = level

    return server


async def serve_stdio(server: Server) -> None:
    """Run the server over stdio until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
