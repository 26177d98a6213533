"""MCP tool registration and dispatch.

Registers all modgraph tools with the MCP server and handles
dispatching tool calls to the appropriate handlers.
"""

import json
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from modgraph.logging import log_operation
from modgraph.mcp.tools.definitions import ALL_TOOLS
from modgraph.mcp.tools.handlers import (
    handle_get_module_graph,
    handle_load_module_graph,
    handle_reset_module_graph,
    handle_select_module,
)


def register_graph_tools(server: Server) -> None:
    """Register module graph tools with the MCP server.

    Args:
        server: The MCP server instance.
    """

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available module graph tools."""
        return ALL_TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        try:
            result = await dispatch_tool(name, arguments)
            return [TextContent(type="text", text=result)]
        except Exception as e:
            return [
                TextContent(
                    type="text",
                    text=f"Error: {type(e).__name__}: {e}",
                )
            ]


# Handler dispatch table
_HANDLERS = {
    "load_module_graph": handle_load_module_graph,
    "get_module_graph": handle_get_module_graph,
    "select_module": handle_select_module,
    "reset_module_graph": handle_reset_module_graph,
}


async def dispatch_tool(name: str, arguments: dict[str, Any] | None) -> str:
    """Dispatch tool call to appropriate handler.

    All tool responses include a 'timing' field with performance metrics.

    Args:
        name: Tool name.
        arguments: Tool arguments.

    Returns:
        JSON string with tool response and timing.

    Raises:
        ValueError: If tool name is unknown.
    """
    handler = _HANDLERS.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")

    arguments = arguments or {}
    log_details: dict[str, Any] = {}
    if "payload_path" in arguments:
        log_details["payload"] = arguments["payload_path"]
    if "module_id" in arguments:
        log_details["module"] = arguments["module_id"]

    with log_operation(f"tool:{name}", log_details) as timing:
        result_str = await handler(arguments)

    # Inject timing into the response
    return inject_timing(result_str, timing.elapsed_ms)


def inject_timing(result_str: str, elapsed_ms: float) -> str:
    """Inject timing information into a JSON response.

    Args:
        result_str: JSON string from handler.
        elapsed_ms: Elapsed time in milliseconds.

    Returns:
        JSON string with timing field added.
    """
    try:
        result = json.loads(result_str)
        if isinstance(result, dict):
            result["timing"] = {
                "total_ms": round(elapsed_ms, 1),
            }
            return json.dumps(result, indent=2)
    except (json.JSONDecodeError, TypeError):
        pass
    return result_str
