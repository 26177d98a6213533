"""MCP Tool schema definitions.

Contains all Tool objects that define the MCP interface for modgraph.
Each Tool specifies its name, description, and JSON schema for inputs.
"""

from mcp.types import Tool

_SETTINGS_SCHEMA = {
    "type": "object",
    "properties": {
        "show_vendor": {"type": "boolean", "description": "Show node_modules modules"},
        "show_virtual": {"type": "boolean", "description": "Show virtual modules"},
        "show_out_of_root": {
            "type": "boolean",
            "description": "Show non-virtual modules outside the project root",
        },
    },
    "additionalProperties": False,
}

LOAD_MODULE_GRAPH_TOOL = Tool(
    name="load_module_graph",
    description=(
        "Load a bundler module list into the session, replacing any previous data. "
        "Pass either payload_path (JSON file with modules and root) or modules + root inline. "
        "Returns a summary of the visible graph under the current view settings."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "payload_path": {
                "type": "string",
                "description": "Absolute path to a JSON file {\"modules\": [...], \"root\": \"...\"}",
            },
            "modules": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string"},
                        "deps": {"type": "array", "items": {"type": "string"}},
                        "virtual": {"type": "boolean"},
                    },
                },
                "description": "Inline module records (used when payload_path is not given)",
            },
            "root": {
                "type": "string",
                "description": "Absolute project root for inline modules",
            },
            "relevant_only": {
                "type": "boolean",
                "description": "Drop modules that are not ts/js/vue/json/css/html source files",
                "default": False,
            },
        },
    },
)

GET_MODULE_GRAPH_TOOL = Tool(
    name="get_module_graph",
    description=(
        "Return the visible module graph (nodes, edges, summary, legend). "
        "Optionally change visibility settings, the search text, or the isolate-to-module "
        "filter root first; changes persist for later calls."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "settings": _SETTINGS_SCHEMA,
            "search": {
                "type": "string",
                "description": "Search text matched against the last path segments (empty clears)",
            },
            "filter_root": {
                "type": "string",
                "description": "Module id to isolate (empty string clears the filter)",
            },
            "summary_only": {
                "type": "boolean",
                "description": "Return counts only instead of nodes and edges",
                "default": False,
            },
        },
    },
)

SELECT_MODULE_TOOL = Tool(
    name="select_module",
    description=(
        "Return the detail record for one module: display name and path, visible "
        "dependencies and visible referencing modules."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "module_id": {
                "type": "string",
                "description": "Normalized module id (as shown in node ids)",
            },
        },
        "required": ["module_id"],
    },
)

RESET_MODULE_GRAPH_TOOL = Tool(
    name="reset_module_graph",
    description="Clear all loaded module data and the visible graph.",
    inputSchema={"type": "object", "properties": {}},
)

ALL_TOOLS = [
    LOAD_MODULE_GRAPH_TOOL,
    GET_MODULE_GRAPH_TOOL,
    SELECT_MODULE_TOOL,
    RESET_MODULE_GRAPH_TOOL,
]
