"""Memory tools for the mcp-mem0 server.

This module routes MCP tool calls to Mem0Store and turns the results into
text responses:
- memory_add: Store a new memory with metadata
- memory_search: Search memories with filters and sorting
- memory_update: Update the content and/or metadata of a memory
- memory_delete: Delete one or several memories (requires confirm: true)

MemoryTools.invoke is the single entry point per call and never raises:
every failure becomes a CallToolResult with isError=True.
"""

import logging
from typing import Any, Optional

from mcp.types import CallToolResult, TextContent, Tool

from mcp_mem0.constants import DEFAULT_USER_ID
from mcp_mem0.storage import Mem0Store
from mcp_mem0.tools.catalog import TOOL_NAMES, TOOLS
from mcp_mem0.types import (
    AddArguments,
    AddCall,
    DeleteArguments,
    DeleteCall,
    MemoryRecord,
    SearchArguments,
    SearchCall,
    UpdateArguments,
    UpdateCall,
    decode_tool_call,
)

# MCP servers must never write to stdout (corrupts JSON-RPC)
logger = logging.getLogger(__name__)

CONFIRMATION_REQUIRED = "Deletion requires confirmation. Please set confirm: true to proceed."
MISSING_DELETE_TARGET = "Either memory_id or memory_ids must be provided"
NO_MEMORIES_FOUND = "No memories found"


def resolve_user_id(user_id: Optional[str], default_user_id: Optional[str] = None) -> str:
    """Pick the user id for a call.

    Priority: explicit caller value, then the configured default, then
    DEFAULT_USER_ID. Empty strings count as not provided.
    """
    return user_id or default_user_id or DEFAULT_USER_ID


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    """Wrap text in a single-item tool result."""
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


def format_memory(record: MemoryRecord) -> str:
    """Render one search hit as a text block ending with a --- separator."""
    lines = [f"Memory: {record.memory}", f"Relevance: {record.score}"]

    metadata = record.metadata
    if metadata.get("category"):
        lines.append(f"Category: {metadata['category']}")
    if metadata.get("importance"):
        lines.append(f"Importance: {metadata['importance']}")
    if metadata.get("tags"):
        lines.append(f"Tags: {', '.join(str(tag) for tag in metadata['tags'])}")
    if metadata.get("source"):
        lines.append(f"Source: {metadata['source']}")

    if record.id:
        lines.append(f"ID: {record.id}")

    lines.append("---")
    return "\n".join(lines)


def format_search_results(records: list[MemoryRecord]) -> str:
    """Render search hits, or NO_MEMORIES_FOUND when there are none."""
    if not records:
        return NO_MEMORIES_FOUND
    return "\n".join(format_memory(record) for record in records)


class MemoryTools:
    """Tool implementations for Mem0 memory operations.

    Args:
        store: Mem0Store used for every remote call
        default_user_id: Configured default user id (MEM0_USER_ID), used
                         when a call does not name a user

    Example:
        >>> tools = MemoryTools(store=Mem0Store(api_key="m0-..."))
        >>> result = await tools.invoke("memory_add", {"content": "Use uv"})
        >>> result.content[0].text
        'Memory added successfully with ID: ...'
    """

    def __init__(self, store: Mem0Store, default_user_id: Optional[str] = None):
        self._store = store
        self._default_user_id = default_user_id

    def list_operations(self) -> list[Tool]:
        """Return the tool catalog."""
        return list(TOOLS)

    def resolve_user_id(self, user_id: Optional[str]) -> str:
        return resolve_user_id(user_id, self._default_user_id)

    async def invoke(self, name: str, arguments: Optional[dict[str, Any]]) -> CallToolResult:
        """Dispatch one tool call.

        Args:
            name: Tool name from the MCP request
            arguments: Argument object from the MCP request (None if absent)

        Returns:
            CallToolResult with a single text item; isError is set on failure
        """
        if arguments is None:
            return text_result("Error: No arguments provided", is_error=True)

        if name not in TOOL_NAMES:
            logger.warning(f"Unknown tool requested: {name}")
            return text_result(f"Unknown tool: {name}", is_error=True)

        try:
            call = decode_tool_call(name, arguments)

            if isinstance(call, AddCall):
                return await self.memory_add(call.arguments)
            if isinstance(call, SearchCall):
                return await self.memory_search(call.arguments)
            if isinstance(call, UpdateCall):
                return await self.memory_update(call.arguments)
            if isinstance(call, DeleteCall):
                return await self.memory_delete(call.arguments)

            return text_result(f"Unknown tool: {name}", is_error=True)

        except Exception as e:
            logger.error(f"Tool {name} failed: {e}", exc_info=True)
            return text_result(f"Error: {e}", is_error=True)

    async def memory_add(self, args: AddArguments) -> CallToolResult:
        """Store a new memory."""
        result = await self._store.add_memory(
            args.content,
            self.resolve_user_id(args.user_id),
            args.metadata,
        )

        if result.success:
            return text_result(f"Memory added successfully with ID: {result.id}")
        return text_result(f"Failed to add memory: {result.error}", is_error=True)

    async def memory_search(self, args: SearchArguments) -> CallToolResult:
        """Search memories and render the hits as text."""
        result = await self._store.search_memories(
            args.query,
            self.resolve_user_id(args.user_id),
            args.filters,
            args.limit,
            args.sort,
        )

        if not result.success:
            return text_result(
                f"Failed to search memories: {result.error or 'Unknown error'}",
                is_error=True,
            )
        return text_result(format_search_results(result.results))

    async def memory_update(self, args: UpdateArguments) -> CallToolResult:
        """Update the content and/or metadata of a memory."""
        result = await self._store.update_memory(
            args.memory_id,
            self.resolve_user_id(args.user_id),
            args.updates,
        )

        if result.success:
            return text_result(f"Memory {args.memory_id} updated successfully")
        return text_result(f"Failed to update memory: {result.error}", is_error=True)

    async def memory_delete(self, args: DeleteArguments) -> CallToolResult:
        """Delete one memory or several.

        Nothing is deleted unless confirm is exactly true. memory_id wins
        over memory_ids when both are given.
        """
        if args.confirm is not True:
            return text_result(CONFIRMATION_REQUIRED, is_error=True)

        user_id = self.resolve_user_id(args.user_id)

        if args.memory_id:
            result = await self._store.delete_memory(args.memory_id, user_id)
            if result.success:
                return text_result(f"Memory {args.memory_id} deleted successfully")
            return text_result(f"Failed to delete memory: {result.error}", is_error=True)

        if args.memory_ids:
            bulk = await self._store.delete_memories(args.memory_ids, user_id)
            text = f"Deleted {bulk.deleted_count} memories successfully"
            if bulk.errors:
                text += f"\nErrors: {'; '.join(bulk.errors)}"
            return text_result(text, is_error=not bulk.success)

        return text_result(MISSING_DELETE_TARGET, is_error=True)
