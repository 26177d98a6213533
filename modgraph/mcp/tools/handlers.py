"""MCP tool handlers.

Each handler processes a tool call against the process-wide session and
returns a JSON string. Session operations run on the event loop thread;
only payload file reads are pushed to a worker thread.
"""

import asyncio
import json
from typing import Any

from modgraph.legend import legend
from modgraph.session import ModuleGraphSession
from modgraph.sources import filter_relevant, load_payload

_session: ModuleGraphSession | None = None


def get_session() -> ModuleGraphSession:
    """Get the process-wide session, creating it on first use."""
    global _session
    if _session is None:
        _session = ModuleGraphSession()
    return _session


def reset_session() -> None:
    """Discard the process-wide session (used by tests)."""
    global _session
    if _session is not None:
        _session.reset()
    _session = None


def _view_state(session: ModuleGraphSession) -> dict[str, Any]:
    return {
        "root": session.root,
        "settings": session.settings.model_dump(),
        "search": session.search_text,
        "filter_root": session.filter_root,
    }


async def handle_load_module_graph(arguments: dict[str, Any]) -> str:
    """Handle load_module_graph tool call.

    Args:
        arguments: Tool arguments with payload_path, or modules and root.

    Returns:
        JSON string with the view state and visible graph summary.
    """
    payload_path = arguments.get("payload_path")
    if payload_path:
        payload = await asyncio.to_thread(load_payload, payload_path)
        modules, root = payload.modules, payload.root
    elif "modules" in arguments:
        modules = arguments.get("modules") or []
        root = arguments.get("root") or ""
        if not isinstance(modules, list):
            raise ValueError("modules must be an array")
    else:
        raise ValueError("payload_path or modules is required")

    if arguments.get("relevant_only", False):
        modules = filter_relevant(modules)

    session = get_session()
    graph = session.ingest(modules, root)
    return json.dumps(
        {
            "modules": len(session.registry),
            **_view_state(session),
            "summary": graph.summary(),
        },
        indent=2,
    )


async def handle_get_module_graph(arguments: dict[str, Any]) -> str:
    """Handle get_module_graph tool call.

    Args:
        arguments: Tool arguments with optional settings, search, filter_root,
            summary_only.

    Returns:
        JSON string with the visible graph.
    """
    session = get_session()

    settings = arguments.get("settings")
    if settings is not None:
        if not isinstance(settings, dict):
            raise ValueError("settings must be an object")
        session.set_visibility_settings(settings)

    if "filter_root" in arguments:
        session.set_filter_root(arguments.get("filter_root") or "")

    if "search" in arguments:
        session.set_search_text(arguments.get("search") or "")

    # A tool call is a single query, so there is no quiet period to wait for
    graph = session.flush()

    output: dict[str, Any] = {
        **_view_state(session),
        "summary": graph.summary(),
    }
    if not arguments.get("summary_only", False):
        output.update(graph.to_json())
        output["legend"] = [entry.model_dump() for entry in legend()]
    return json.dumps(output, indent=2)


async def handle_select_module(arguments: dict[str, Any]) -> str:
    """Handle select_module tool call.

    Args:
        arguments: Tool arguments with module_id.

    Returns:
        JSON string with the detail record, or found=false for unknown ids.
    """
    module_id = arguments.get("module_id")
    if not module_id:
        raise ValueError("module_id is required")

    record = get_session().select_node(module_id)
    if record is None:
        return json.dumps({"found": False, "module_id": module_id}, indent=2)
    return json.dumps({"found": True, **record.model_dump()}, indent=2)


async def handle_reset_module_graph(arguments: dict[str, Any]) -> str:
    """Handle reset_module_graph tool call.

    Returns:
        JSON string confirming the reset.
    """
    session = get_session()
    session.reset()
    return json.dumps({"reset": True, "modules": len(session.registry)}, indent=2)
