"""Tool catalog for the mcp-mem0 server.

Declares the four memory tools advertised by tools/list, in order:
memory_add, memory_search, memory_update, memory_delete. Each entry carries
the guidance text shown to the model and the JSON schema the MCP server
validates arguments against before dispatch.
"""

from typing import Any

from mcp.types import Tool

from mcp_mem0.constants import (
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_USER_ID,
    MAX_SEARCH_LIMIT,
    TOOL_MEMORY_ADD,
    TOOL_MEMORY_DELETE,
    TOOL_MEMORY_SEARCH,
    TOOL_MEMORY_UPDATE,
)

CATEGORY_HINT = (
    '"frontend", "backend", "devops", "database", "testing", "configuration", '
    '"debugging", "architecture", "security", "performance"'
)

USER_ID_PROPERTY: dict[str, Any] = {
    "type": "string",
    "description": (
        "User ID for memory isolation. If not provided, uses the MEM0_USER_ID "
        f"environment variable or defaults to '{DEFAULT_USER_ID}'"
    ),
}


def _metadata_schema(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "description": description,
        "properties": {
            "category": {
                "type": "string",
                "description": f"Domain category: {CATEGORY_HINT}",
            },
            "importance": {
                "type": "integer",
                "description": (
                    "Importance level: 1-3 (reference), 4-6 (useful), "
                    "7-8 (important), 9-10 (critical/frequently used)"
                ),
                "minimum": 1,
                "maximum": 10,
            },
            "tags": {
                "type": "array",
                "description": (
                    "Searchable tags: language, framework and library names, concepts "
                    '(e.g. ["python", "asyncio", "error-handling"])'
                ),
                "items": {"type": "string"},
            },
            "source": {
                "type": "string",
                "description": (
                    'Source context: "conversation", "documentation", "tutorial", '
                    '"stackoverflow", "github", "official-docs", "personal-project"'
                ),
            },
        },
        "additionalProperties": False,
    }


MEMORY_ADD_TOOL = Tool(
    name=TOOL_MEMORY_ADD,
    description="""Add coding knowledge, a snippet or a preference to mem0 for future reference.

WHEN TO USE:
- Complete code implementations and solutions
- Configuration files, setup procedures and environment details
- Coding patterns, best practices and architectural decisions
- Troubleshooting steps and debugging solutions

WHAT TO INCLUDE:
- Complete, runnable code with all imports and dependency files
- Exact versions of languages, frameworks and tools
- Step-by-step usage, with sample inputs and outputs
- Known limitations, security notes and common pitfalls
- Links to official documentation or related examples

Use metadata to set the category, an importance from 1 to 10, searchable
tags and the source of the knowledge.""",
    inputSchema={
        "type": "object",
        "properties": {
            "content": {
                "type": "string",
                "description": "The content to store (follow the guidelines above)",
            },
            "userId": USER_ID_PROPERTY,
            "metadata": _metadata_schema("Metadata for organization and retrieval"),
        },
        "required": ["content"],
        "additionalProperties": False,
    },
)

MEMORY_SEARCH_TOOL = Tool(
    name=TOOL_MEMORY_SEARCH,
    description="""Search stored coding knowledge with semantic search.

Call this before answering programming questions to reuse stored solutions.

HOW TO SEARCH:
- Use natural language: "file uploads in a FastAPI endpoint"
- Name the technologies: "async SQLAlchemy session handling"
- Paste error messages: "ModuleNotFoundError after poetry install"

RESULTS:
- Ranked by semantic relevance, each with its metadata and ID
- Use filters to narrow by category, tags, minimum importance or date range
- Sort by "importance" for the most battle-tested answers first""",
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": (
                    "Natural language query describing what you need "
                    "(be specific about technologies and use cases)"
                ),
            },
            "userId": USER_ID_PROPERTY,
            "filters": {
                "type": "object",
                "description": "Optional filters to refine search results",
                "properties": {
                    "category": {
                        "type": "string",
                        "description": f"Filter by category: {CATEGORY_HINT}",
                    },
                    "tags": {
                        "type": "array",
                        "description": 'Filter by technologies or concepts (e.g. ["docker", "kubernetes"])',
                        "items": {"type": "string"},
                    },
                    "importance_min": {
                        "type": "integer",
                        "description": "Minimum importance level (7+ for production-ready solutions)",
                        "minimum": 1,
                        "maximum": 10,
                    },
                    "date_range": {
                        "type": "object",
                        "description": "Filter by when the memory was stored",
                        "properties": {
                            "start": {
                                "type": "string",
                                "description": 'Start date in ISO 8601 format (e.g. "2024-01-01T00:00:00Z")',
                            },
                            "end": {
                                "type": "string",
                                "description": 'End date in ISO 8601 format (e.g. "2024-12-31T23:59:59Z")',
                            },
                        },
                        "required": ["start", "end"],
                        "additionalProperties": False,
                    },
                },
                "additionalProperties": False,
            },
            "limit": {
                "type": "integer",
                "description": "Maximum results: 5-10 for quick lookups, 20+ for research",
                "minimum": 1,
                "maximum": MAX_SEARCH_LIMIT,
                "default": DEFAULT_SEARCH_LIMIT,
            },
            "sort": {
                "type": "string",
                "description": (
                    'Sort order: "relevance" (best match), "date" (newest first), '
                    '"importance" (highest importance first)'
                ),
                "enum": ["relevance", "date", "importance"],
                "default": "relevance",
            },
        },
        "required": ["query"],
        "additionalProperties": False,
    },
)

MEMORY_UPDATE_TOOL = Tool(
    name=TOOL_MEMORY_UPDATE,
    description="""Update an existing memory to keep it current and accurate.

WHEN TO UPDATE:
- Better error handling, edge cases or extra usage examples
- Newer library versions, with migration notes
- Fixes for bugs, security issues or outdated information

Say what changed and why in the new content, and adjust tags and importance
to match. Get the memory ID from memory_search results.""",
    inputSchema={
        "type": "object",
        "properties": {
            "memory_id": {
                "type": "string",
                "description": "ID of the memory to update (from search results)",
            },
            "userId": USER_ID_PROPERTY,
            "updates": {
                "type": "object",
                "description": "Changes to apply; omitted fields are left as they are",
                "properties": {
                    "content": {
                        "type": "string",
                        "description": "Replacement content (same guidelines as memory_add)",
                    },
                    "metadata": _metadata_schema("Replacement metadata"),
                },
                "additionalProperties": False,
            },
        },
        "required": ["memory_id", "updates"],
        "additionalProperties": False,
    },
)

MEMORY_DELETE_TOOL = Tool(
    name=TOOL_MEMORY_DELETE,
    description="""Delete outdated, incorrect or duplicate memories.

Deletion is permanent and requires confirm: true. Provide either memory_id
for one memory or memory_ids for several. Bulk deletion processes IDs one
by one and does not roll back: IDs deleted before a failure stay deleted.

Search and review before deleting. Consider memory_update with a
deprecation note or a lower importance instead.""",
    inputSchema={
        "type": "object",
        "properties": {
            "memory_id": {
                "type": "string",
                "description": "Single memory ID to delete (use this OR memory_ids)",
            },
            "memory_ids": {
                "type": "array",
                "description": "Memory IDs for bulk deletion (use this OR memory_id)",
                "items": {"type": "string"},
                "minItems": 1,
            },
            "userId": USER_ID_PROPERTY,
            "confirm": {
                "type": "boolean",
                "description": "Must be true to delete. Set only after reviewing what will be deleted.",
                "default": False,
            },
        },
        "required": [],
        "additionalProperties": False,
    },
)

TOOLS: tuple[Tool, ...] = (
    MEMORY_ADD_TOOL,
    MEMORY_SEARCH_TOOL,
    MEMORY_UPDATE_TOOL,
    MEMORY_DELETE_TOOL,
)

TOOL_NAMES: frozenset[str] = frozenset(tool.name for tool in TOOLS)
