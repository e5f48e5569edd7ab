"""Storage layer for mcp-mem0.

Memories live on the Mem0 platform; this package only adapts local calls
to the Mem0 API and back.

Example:
    >>> from mcp_mem0.storage import Mem0Store
    >>> store = Mem0Store(api_key="m0-...")
    >>> result = await store.search_memories("docker compose", "alice", limit=5)
"""

from mcp_mem0.storage.mem0_store import Mem0Store, Mem0StoreError, sort_by_importance

__all__ = [
    "Mem0Store",
    "Mem0StoreError",
    "sort_by_importance",
]
