"""Type system for mcp-mem0.

The key types are:
- Tool argument models (AddArguments, SearchArguments, UpdateArguments,
  DeleteArguments) and the ToolCall union decoded by decode_tool_call
- MemoryRecord: a memory returned by Mem0 search
- Result dataclasses returned by Mem0Store

Example:
    >>> from mcp_mem0.types import decode_tool_call
    >>> call = decode_tool_call("memory_add", {"content": "Use uv for envs"})
    >>> call.arguments.content
    'Use uv for envs'
"""

from mcp_mem0.types.memory import (
    AddArguments,
    AddCall,
    AddResult,
    BulkDeleteResult,
    DateRange,
    DeleteArguments,
    DeleteCall,
    MemoryMetadata,
    MemoryRecord,
    MemoryUpdate,
    MutationResult,
    SearchArguments,
    SearchCall,
    SearchFilters,
    SearchResult,
    SortOrder,
    ToolCall,
    UpdateArguments,
    UpdateCall,
    decode_tool_call,
)

__all__ = [
    # Tool arguments
    "AddArguments",
    "SearchArguments",
    "UpdateArguments",
    "DeleteArguments",
    "MemoryMetadata",
    "MemoryUpdate",
    "SearchFilters",
    "DateRange",
    "SortOrder",
    # Tool call union
    "ToolCall",
    "AddCall",
    "SearchCall",
    "UpdateCall",
    "DeleteCall",
    "decode_tool_call",
    # Memory record
    "MemoryRecord",
    # Operation result types
    "AddResult",
    "SearchResult",
    "MutationResult",
    "BulkDeleteResult",
]
