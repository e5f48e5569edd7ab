"""Memory types for mcp-mem0.

This module defines the local shapes that flow between the MCP tool layer
and the Mem0 adapter:
- Argument models, one per tool, decoded once at the dispatch boundary
  through the ToolCall tagged union
- MemoryRecord, the local view of a memory returned by Mem0
- Result dataclasses returned by Mem0Store operations

The memories themselves are owned by the Mem0 platform; nothing here is
persisted.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, TypeAdapter

SortOrder = Literal["relevance", "date", "importance"]


# =============================================================================
# Tool Argument Models
# =============================================================================


class MemoryMetadata(BaseModel):
    """Metadata attached to a memory.

    Attributes:
        category: Domain category (frontend, backend, devops, ...)
        importance: 1-3 reference, 4-6 useful, 7-8 important, 9-10 critical
        tags: Searchable tags for technologies and concepts
        source: Origin context (conversation, documentation, github, ...)
    """

    model_config = ConfigDict(extra="forbid")

    category: Optional[str] = None
    importance: Optional[int] = Field(default=None, ge=1, le=10)
    tags: Optional[list[str]] = None
    source: Optional[str] = None


class DateRange(BaseModel):
    """Creation date window, both bounds ISO 8601."""

    model_config = ConfigDict(extra="forbid")

    start: str
    end: str


class SearchFilters(BaseModel):
    """Optional filters narrowing a memory search."""

    model_config = ConfigDict(extra="forbid")

    category: Optional[str] = None
    tags: Optional[list[str]] = None
    importance_min: Optional[int] = Field(default=None, ge=1, le=10)
    date_range: Optional[DateRange] = None


class MemoryUpdate(BaseModel):
    """Partial update of a memory. Absent fields are left untouched."""

    model_config = ConfigDict(extra="forbid")

    content: Optional[str] = None
    metadata: Optional[MemoryMetadata] = None


class _ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")


class AddArguments(_ToolArguments):
    """Arguments of memory_add."""

    content: str
    metadata: Optional[MemoryMetadata] = None


class SearchArguments(_ToolArguments):
    """Arguments of memory_search.

    limit is not bounded here; Mem0Store caps it at MAX_SEARCH_LIMIT.
    """

    query: str
    filters: Optional[SearchFilters] = None
    limit: int = 10
    sort: SortOrder = "relevance"


class UpdateArguments(_ToolArguments):
    """Arguments of memory_update."""

    memory_id: str
    updates: MemoryUpdate


class DeleteArguments(_ToolArguments):
    """Arguments of memory_delete.

    confirm is strict: only a JSON true enables deletion.
    """

    memory_id: Optional[str] = None
    memory_ids: Optional[list[str]] = None
    confirm: Optional[StrictBool] = False


# =============================================================================
# Tool Call Union
# =============================================================================


class AddCall(BaseModel):
    tool: Literal["memory_add"]
    arguments: AddArguments


class SearchCall(BaseModel):
    tool: Literal["memory_search"]
    arguments: SearchArguments


class UpdateCall(BaseModel):
    tool: Literal["memory_update"]
    arguments: UpdateArguments


class DeleteCall(BaseModel):
    tool: Literal["memory_delete"]
    arguments: DeleteArguments


ToolCall = Annotated[
    Union[AddCall, SearchCall, UpdateCall, DeleteCall],
    Field(discriminator="tool"),
]

_TOOL_CALL_ADAPTER = TypeAdapter(ToolCall)


def decode_tool_call(name: str, arguments: dict[str, Any]) -> ToolCall:
    """Decode a raw tool invocation into its typed variant.

    Args:
        name: Tool name (must be one of the catalog names)
        arguments: Raw argument object from the MCP request

    Returns:
        AddCall, SearchCall, UpdateCall or DeleteCall

    Raises:
        pydantic.ValidationError: If the name or arguments do not decode
    """
    return _TOOL_CALL_ADAPTER.validate_python({"tool": name, "arguments": arguments})


# =============================================================================
# Memory Record
# =============================================================================


@dataclass
class MemoryRecord:
    """A memory as returned by Mem0 search.

    Attributes:
        id: Mem0 memory id
        memory: Stored memory text
        score: Relevance score for the query
        metadata: Metadata bag (category, importance, tags, source, ...)
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 update timestamp
    """

    memory: str
    id: Optional[str] = None
    score: Optional[float] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "MemoryRecord":
        """Build a record from one item of a Mem0 search response.

        Non-dict metadata becomes an empty bag, and a scalar tags value
        becomes a one-element list.
        """
        metadata = raw.get("metadata")
        metadata = dict(metadata) if isinstance(metadata, dict) else {}
        tags = metadata.get("tags")
        if tags and not isinstance(tags, list):
            metadata["tags"] = [str(tags)]

        return cls(
            memory=raw.get("memory", ""),
            id=raw.get("id"),
            score=raw.get("score"),
            metadata=metadata,
            created_at=raw.get("created_at"),
            updated_at=raw.get("updated_at"),
        )

    @property
    def importance(self) -> float:
        """Importance from metadata, 0 when missing or not numeric."""
        value = self.metadata.get("importance")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return value


# =============================================================================
# Result Types for Mem0Store Operations
# =============================================================================


@dataclass
class AddResult:
    """Result of adding a memory.

    Attributes:
        success: Whether Mem0 accepted the memory
        id: Memory id reported by Mem0 ("unknown" if none was reported)
        error: Error message (if failed)
    """

    success: bool
    id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class SearchResult:
    """Result of a memory search.

    Attributes:
        success: Whether the search call succeeded
        results: Matching memories, in display order
        error: Error message (if failed)
    """

    success: bool
    results: list[MemoryRecord] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class MutationResult:
    """Result of an update or single delete."""

    success: bool
    error: Optional[str] = None


@dataclass
class BulkDeleteResult:
    """Result of deleting several memories.

    There is no rollback: memories deleted before a failure stay deleted,
    so success=False can still mean deleted_count > 0.

    Attributes:
        success: True only if every deletion succeeded
        deleted_count: Number of memories deleted
        errors: One "Failed to delete <id>: <message>" entry per failure
    """

    success: bool
    deleted_count: int = 0
    errors: list[str] = field(default_factory=list)
