"""Mem0 platform storage layer.

This module wraps the Mem0 AsyncMemoryClient behind five async operations:
- add_memory: Store content with category, tags, importance and source
- search_memories: Semantic search with filters, limit capping and
  client-side importance sorting
- update_memory: Replace the text and/or metadata of a memory
- delete_memory: Delete one memory
- delete_memories: Delete several memories sequentially, collecting
  per-item errors

Every operation returns a result dataclass. Vendor exceptions are caught
and reported through the result's error field, so callers never see them.
"""

import logging
from typing import Any, Optional

from mem0 import AsyncMemoryClient

from mcp_mem0.constants import (
    DEFAULT_SEARCH_LIMIT,
    MAX_SEARCH_LIMIT,
    SYSTEM_FRAMING_MESSAGE,
    UNKNOWN_MEMORY_ID,
)
from mcp_mem0.types import (
    AddResult,
    BulkDeleteResult,
    MemoryMetadata,
    MemoryRecord,
    MemoryUpdate,
    MutationResult,
    SearchFilters,
    SearchResult,
    SortOrder,
)

# MCP servers must never write to stdout (corrupts JSON-RPC)
# All logging goes to stderr
logger = logging.getLogger(__name__)


class Mem0StoreError(Exception):
    """Raised when the Mem0 store cannot be initialized."""

    pass


def _error_message(error: Exception) -> str:
    return str(error) or "Unknown error"


def _extract_id(response: Any) -> str:
    """Pull the memory id out of a Mem0 add response.

    The platform has answered with a bare object, an event list, and an
    object wrapping an event list over time; all three are accepted.
    """
    if isinstance(response, dict):
        if response.get("id"):
            return str(response["id"])
        response = response.get("results")
    if isinstance(response, list) and response:
        first = response[0]
        if isinstance(first, dict) and first.get("id"):
            return str(first["id"])
    return UNKNOWN_MEMORY_ID


def _extract_results(response: Any) -> list[dict[str, Any]]:
    """Normalize a Mem0 search response to a list of raw memories."""
    if isinstance(response, dict):
        response = response.get("results")
    if not isinstance(response, list):
        return []
    return [item for item in response if isinstance(item, dict)]


def sort_by_importance(records: list[MemoryRecord]) -> list[MemoryRecord]:
    """Sort records by metadata importance, highest first.

    Missing importance counts as 0. Records with equal importance keep
    their original relative order.
    """
    return sorted(records, key=lambda record: record.importance, reverse=True)


class Mem0Store:
    """Async adapter over the Mem0 platform API.

    Args:
        api_key: Mem0 platform API key
        client: Pre-built client (tests inject a mock here). When omitted an
                AsyncMemoryClient is created from api_key.

    Example:
        >>> store = Mem0Store(api_key="m0-...")
        >>> result = await store.add_memory("Prefer ruff over flake8", "alice")
        >>> result.id
        'a1b2c3'
    """

    def __init__(self, api_key: str, client: Optional[Any] = None):
        """Initialize the store.

        Raises:
            Mem0StoreError: If api_key is empty or the Mem0 client cannot
                be created (rejected key, platform unreachable)
        """
        if not api_key:
            raise Mem0StoreError("MEM0_API_KEY environment variable is required")

        if client is not None:
            self._client = client
            return

        # AsyncMemoryClient pings the platform to validate the key
        try:
            self._client = AsyncMemoryClient(api_key=api_key)
        except Exception as e:
            raise Mem0StoreError(f"Failed to initialize Mem0 client: {e}") from e

    async def add_memory(
        self,
        content: str,
        user_id: str,
        metadata: Optional[MemoryMetadata] = None,
    ) -> AddResult:
        """Store a new memory.

        The content is sent as a user message after a fixed system framing
        message. Metadata maps onto the Mem0 add options:
        - category -> categories (single element list)
        - tags -> filters.tags
        - every set field -> metadata

        Args:
            content: Memory text
            user_id: Resolved user id
            metadata: Optional metadata; unset fields are not sent

        Returns:
            AddResult with the new memory id or an error
        """
        messages = [
            {"role": "system", "content": SYSTEM_FRAMING_MESSAGE},
            {"role": "user", "content": content},
        ]
        options: dict[str, Any] = {"user_id": user_id}

        if metadata is not None:
            if metadata.category:
                options["categories"] = [metadata.category]
            if metadata.tags is not None:
                options["filters"] = {"tags": metadata.tags}
            bag = metadata.model_dump(exclude_none=True)
            if bag:
                options["metadata"] = bag

        try:
            response = await self._client.add(messages, **options)
        except Exception as e:
            logger.error(f"Error adding memory for user {user_id}: {e}")
            return AddResult(success=False, error=_error_message(e))

        logger.debug(f"Mem0 add response: {response!r}")
        memory_id = _extract_id(response)
        logger.info(f"Stored memory {memory_id} for user {user_id}")
        return AddResult(success=True, id=memory_id)

    async def search_memories(
        self,
        query: str,
        user_id: str,
        filters: Optional[SearchFilters] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        sort: SortOrder = "relevance",
    ) -> SearchResult:
        """Semantic search over a user's memories.

        The limit is capped at MAX_SEARCH_LIMIT and sent as top_k; the floor
        is left to the tool schema. The user id is always sent inside
        filters (Mem0 rejects it as a top-level search parameter); memory
        filters are added next to it only when set. "relevance" and "date"
        keep the order Mem0 returns; "importance" is sorted here.

        Args:
            query: Natural language query
            user_id: Resolved user id
            filters: Optional category/tags/importance/date filters
            limit: Maximum number of results
            sort: "relevance", "date" or "importance"

        Returns:
            SearchResult with matching MemoryRecords or an error
        """
        search_filters: dict[str, Any] = {"user_id": user_id}

        if filters is not None:
            if filters.category:
                search_filters["category"] = filters.category
            if filters.tags:
                search_filters["tags"] = filters.tags
            if filters.importance_min is not None:
                search_filters["importance_min"] = filters.importance_min
            if filters.date_range is not None:
                search_filters["created_at"] = {
                    "gte": filters.date_range.start,
                    "lte": filters.date_range.end,
                }

        try:
            response = await self._client.search(
                query,
                filters=search_filters,
                top_k=min(limit, MAX_SEARCH_LIMIT),
            )
        except Exception as e:
            logger.error(f"Error searching memories for user {user_id}: {e}")
            return SearchResult(success=False, error=_error_message(e))

        records = [MemoryRecord.from_api(raw) for raw in _extract_results(response)]
        if sort == "importance":
            records = sort_by_importance(records)

        logger.debug(f"Search '{query[:50]}' returned {len(records)} memories")
        return SearchResult(success=True, results=records)

    async def update_memory(
        self,
        memory_id: str,
        user_id: str,
        updates: Optional[MemoryUpdate] = None,
    ) -> MutationResult:
        """Update the text and/or metadata of a memory.

        updates.content is sent as text and updates.metadata as metadata;
        fields that are not set are not sent at all.

        Args:
            memory_id: Mem0 memory id
            user_id: Resolved user id (Mem0 updates are addressed by id)
            updates: Partial update

        Returns:
            MutationResult
        """
        payload: dict[str, Any] = {}
        if updates is not None:
            if updates.content is not None:
                payload["text"] = updates.content
            if updates.metadata is not None:
                payload["metadata"] = updates.metadata.model_dump(exclude_none=True)

        try:
            await self._client.update(memory_id, **payload)
        except Exception as e:
            logger.error(f"Error updating memory {memory_id}: {e}")
            return MutationResult(success=False, error=_error_message(e))

        logger.info(f"Updated memory {memory_id} for user {user_id}")
        return MutationResult(success=True)

    async def delete_memory(self, memory_id: str, user_id: str) -> MutationResult:
        """Delete one memory.

        user_id is accepted for symmetry with the other operations but is
        not sent: Mem0 deletes by memory id only.
        """
        try:
            await self._client.delete(memory_id)
        except Exception as e:
            logger.error(f"Error deleting memory {memory_id}: {e}")
            return MutationResult(success=False, error=_error_message(e))

        logger.info(f"Deleted memory {memory_id} for user {user_id}")
        return MutationResult(success=True)

    async def delete_memories(self, memory_ids: list[str], user_id: str) -> BulkDeleteResult:
        """Delete several memories one after another.

        Deletions run sequentially and continue past failures. Nothing is
        rolled back: memories deleted before a failure stay deleted.

        Args:
            memory_ids: Memory ids to delete, in order
            user_id: Resolved user id (not sent, see delete_memory)

        Returns:
            BulkDeleteResult with the deleted count and one error string
            per failed id
        """
        deleted_count = 0
        errors: list[str] = []

        for memory_id in memory_ids:
            try:
                await self._client.delete(memory_id)
                deleted_count += 1
            except Exception as e:
                logger.error(f"Error deleting memory {memory_id}: {e}")
                errors.append(f"Failed to delete {memory_id}: {_error_message(e)}")

        logger.info(
            f"Bulk delete for user {user_id}: {deleted_count} deleted, {len(errors)} failed"
        )
        return BulkDeleteResult(
            success=not errors,
            deleted_count=deleted_count,
            errors=errors,
        )
