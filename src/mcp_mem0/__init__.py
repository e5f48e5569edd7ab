"""mcp-mem0 - Mem0 memory operations exposed as MCP tools.

Bridges the Mem0 hosted memory platform into the Model Context Protocol
so that AI assistants can add, search, update and delete memories.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
