"""MCP server entry point for mcp-mem0.

This module provides the main entry point for the mcp-mem0 server with:
- CLI argument parsing layered over MEM0_* settings
- Component initialization in dependency order
- Direct tool call mode for debugging without an MCP client
- Signal handling for graceful shutdown
- Logging to stderr (CRITICAL for MCP stdio)

Usage:
    python -m mcp_mem0 [options]

    Options:
        --log-level LEVEL       Logging level (default: MEM0_LOG_LEVEL or INFO)
        --user-id USER_ID       Default user id (default: MEM0_USER_ID)
        --call TOOL_NAME        Call one tool, print the JSON result and exit
        --args JSON             Arguments for --call (default: {})

CRITICAL: MCP servers using stdio transport must NEVER write to stdout
as it corrupts JSON-RPC messages. All logging goes to stderr.
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

# Load .env file - must be done before any config access
load_dotenv()

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging to stderr (never stdout for MCP servers).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # Critical: never use stdout in MCP servers
    )

    logger.info(f"Logging initialized at {log_level.upper()} level")


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Flags left unset fall back to the MEM0_* settings in main().

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="mcp-mem0",
        description="MCP server exposing Mem0 memory operations as tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Direct tool call mode (debugging without an MCP client)
    parser.add_argument(
        "--call",
        type=str,
        metavar="TOOL_NAME",
        help="Call a tool directly, print the JSON result and exit",
    )
    parser.add_argument(
        "--args",
        type=str,
        default="{}",
        help="JSON arguments for --call mode",
    )

    parser.add_argument(
        "--user-id",
        type=str,
        default=None,
        help="Default user id for memory isolation (overrides MEM0_USER_ID)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides MEM0_LOG_LEVEL)",
    )

    return parser.parse_args(argv)


def initialize_components(settings: Any, user_id: Optional[str] = None) -> dict[str, Any]:
    """Initialize all components in dependency order.

    1. Mem0Store (fails fast without an API key)
    2. MemoryTools (receives the store and the default user id)

    Args:
        settings: Loaded Mem0Settings
        user_id: Default user id from the CLI, overriding settings.user_id

    Returns:
        Dictionary containing all initialized components

    Raises:
        Mem0StoreError: If MEM0_API_KEY is missing or the Mem0 client fails to start
    """
    from mcp_mem0.storage import Mem0Store
    from mcp_mem0.tools import MemoryTools

    logger.info("Initializing Mem0Store")
    store = Mem0Store(api_key=settings.api_key)

    default_user_id = user_id or settings.user_id
    logger.info(f"Initializing MemoryTools (default user: {default_user_id or 'fallback'})")
    memory_tools = MemoryTools(store=store, default_user_id=default_user_id)

    return {"store": store, "memory_tools": memory_tools}


def handle_shutdown(signum: int, _frame: Any) -> None:
    """Handle SIGINT/SIGTERM for graceful shutdown."""
    logger.info(f"Received signal {signum}, shutting down gracefully...")
    sys.exit(0)


def call_tool_directly(memory_tools: Any, tool_name: str, raw_args: str) -> None:
    """Call a tool through MemoryTools and print the JSON result to stdout.

    Args:
        memory_tools: Initialized MemoryTools
        tool_name: Tool to call
        raw_args: JSON object with the tool arguments
    """
    try:
        tool_args = json.loads(raw_args)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON args: {e}"}))
        sys.exit(1)

    result = asyncio.run(memory_tools.invoke(tool_name, tool_args))
    print(json.dumps(result.model_dump(mode="json", exclude_none=True)))
    if result.isError:
        sys.exit(1)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the MCP server.

    Workflow:
    1. Parse CLI arguments and load settings
    2. Setup logging to stderr
    3. Initialize components
    4. Run one direct call, or serve MCP over stdio
    """
    args = parse_arguments(argv)

    from mcp_mem0.config import Mem0Settings
    from mcp_mem0.storage import Mem0StoreError

    try:
        settings = Mem0Settings()
    except ValidationError as e:
        sys.stderr.write(f"ERROR: Invalid MEM0_* configuration:\n{e}\n")
        sys.exit(1)

    # Quiet logging for --call mode
    setup_logging("WARNING" if args.call else (args.log_level or settings.log_level))

    try:
        components = initialize_components(settings, user_id=args.user_id)
    except Mem0StoreError as e:
        logger.error(f"Failed to initialize components: {e}")
        sys.exit(1)

    if args.call:
        call_tool_directly(components["memory_tools"], args.call, args.args)
        return

    from mcp_mem0.mcp_server import create_server, serve_stdio

    server = create_server(components["memory_tools"])

    signal.signal(signal.SIGINT, handle_shutdown)
    signal.signal(signal.SIGTERM, handle_shutdown)

    logger.info("Starting mcp-mem0 MCP server...")
    try:
        asyncio.run(serve_stdio(server))
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
