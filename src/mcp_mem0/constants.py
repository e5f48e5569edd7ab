"""mcp-mem0 constants.

Implementation details that do not change between deployments. User-facing
settings live in config.py.
"""

# Fallback when neither the caller nor MEM0_USER_ID supplies a user id
DEFAULT_USER_ID = "mcp-mem0-user"

# Search limits
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 100

# First message of every add call; the user content follows it
SYSTEM_FRAMING_MESSAGE = "Memory storage system"

# Placeholder when the Mem0 add response carries no id
UNKNOWN_MEMORY_ID = "unknown"

# Tool names
TOOL_MEMORY_ADD = "memory_add"
TOOL_MEMORY_SEARCH = "memory_search"
TOOL_MEMORY_UPDATE = "memory_update"
TOOL_MEMORY_DELETE = "memory_delete"

SERVER_NAME = "mcp-mem0"
