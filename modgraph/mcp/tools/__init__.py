"""MCP tools registration.

Provides tool definitions, handlers, and registration functions for
the modgraph MCP server.
"""

from mcp.server import Server

from modgraph.mcp.tools.definitions import (
    ALL_TOOLS,
    GET_MODULE_GRAPH_TOOL,
    LOAD_MODULE_GRAPH_TOOL,
    RESET_MODULE_GRAPH_TOOL,
    SELECT_MODULE_TOOL,
)
from modgraph.mcp.tools.dispatch import (
    dispatch_tool,
    inject_timing,
    register_graph_tools,
)


def register_tools(server: Server) -> None:
    """Register all MCP tools with the server.

    Args:
        server: The MCP server instance.
    """
    register_graph_tools(server)


__all__ = [
    # Registration
    "register_tools",
    "register_graph_tools",
    # Dispatch
    "dispatch_tool",
    "inject_timing",
    # Tool definitions
    "ALL_TOOLS",
    "LOAD_MODULE_GRAPH_TOOL",
    "GET_MODULE_GRAPH_TOOL",
    "SELECT_MODULE_TOOL",
    "RESET_MODULE_GRAPH_TOOL",
]
