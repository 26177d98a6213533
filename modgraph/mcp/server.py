"""MCP server implementation for modgraph.

Exposes one process-wide module graph session through MCP tools: load a
module list, query the visible graph under some view state, inspect a single
module, and reset.
"""

import asyncio

from mcp.server import Server
from mcp.server.stdio import stdio_server

from modgraph import __version__
from modgraph.logging import logger
from modgraph.mcp.tools import register_tools

# Server configuration
SERVER_NAME = "modgraph"
SERVER_VERSION = __version__


def create_server() -> Server:
    """Create and configure the MCP server.

    Returns:
        Configured MCP Server instance with all tools registered.
    """
    server = Server(SERVER_NAME)

    # Register all tools
    register_tools(server)

    return server


async def run_server_async() -> None:
    """Run the MCP server with stdio transport."""
    server = create_server()

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        logger.info("MCP server shutdown complete")


def run_server() -> None:
    """Run the MCP server (blocking)."""
    asyncio.run(run_server_async())
