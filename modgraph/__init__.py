"""modgraph - module dependency graph inspection for bundler module lists."""

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"


def run_server() -> None:
    """Run the modgraph MCP server (blocking).

    Uses stdio transport for communication with the client.
    """
    from modgraph.mcp.server import run_server as _run_server
    _run_server()
