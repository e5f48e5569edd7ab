"""MCP tools module for mcp-mem0.

- catalog: Tool descriptors advertised through tools/list
- memory_tools: MemoryTools, routing tool calls to Mem0Store and
  formatting the results

MemoryTools receives its Mem0Store through the constructor.

Example:
    >>> from mcp_mem0.tools import MemoryTools
    >>> tools = MemoryTools(store=store, default_user_id="alice")
    >>> result = await tools.invoke("memory_search", {"query": "pytest fixtures"})
"""

from mcp_mem0.tools.catalog import TOOLS
from mcp_mem0.tools.memory_tools import MemoryTools, resolve_user_id

__all__ = [
    "TOOLS",
    "MemoryTools",
    "resolve_user_id",
]
