"""CLI interface for modgraph.

Provides commands for inspecting a dumped module graph and running the MCP
server.
"""

import json
import sys
from collections.abc import Callable
from typing import Any

import click
from dotenv import load_dotenv

# Load .env before importing other modgraph modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from modgraph import __version__  # noqa: E402


def _view_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the payload argument and visibility/search/filter options."""
    options = [
        click.argument("payload_path", type=click.Path(exists=True, dir_okay=False)),
        click.option("--vendor", is_flag=True, help="Show node_modules modules"),
        click.option("--virtual", is_flag=True, help="Show virtual modules"),
        click.option("--out-of-root", is_flag=True, help="Show modules outside the project root"),
        click.option("--search", default="", help="Focus on modules whose short id contains TEXT"),
        click.option("--filter-root", default="", help="Isolate the graph to one module's closure"),
        click.option(
            "--relevant-only",
            is_flag=True,
            help="Drop modules that are not source files (ts/js/vue/json/css/html...)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_session(
    payload_path: str,
    vendor: bool,
    virtual: bool,
    out_of_root: bool,
    search: str,
    filter_root: str,
    relevant_only: bool,
):
    """Build a session from a payload file with the requested view state."""
    from modgraph.session import ModuleGraphSession
    from modgraph.sources import PayloadError, filter_relevant, load_payload

    try:
        payload = load_payload(payload_path)
    except PayloadError as e:
        click.echo(f"Failed to load payload: {e}", err=True)
        sys.exit(1)

    modules = filter_relevant(payload.modules) if relevant_only else payload.modules

    session = ModuleGraphSession()
    session.ingest(modules, payload.root)
    session.set_visibility_settings(
        {"show_vendor": vendor, "show_virtual": virtual, "show_out_of_root": out_of_root}
    )
    session.set_filter_root(filter_root)
    # No event loop here, so the search rebuild runs immediately
    session.set_search_text(search)
    return session


@click.group()
@click.version_option(version=__version__, prog_name="modgraph")
def cli() -> None:
    """modgraph - module dependency graph inspection."""
    pass


@cli.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio"]),
    default="stdio",
    help="Transport protocol (default: stdio)",
)
def serve(transport: str) -> None:
    """Start the MCP server."""
    # Import here to avoid slow startup for the inspection commands
    from modgraph import run_server

    run_server()


@cli.command()
@_view_options
@click.option("--summary", is_flag=True, help="Print counts instead of the full graph")
def show(
    payload_path: str,
    vendor: bool,
    virtual: bool,
    out_of_root: bool,
    search: str,
    filter_root: str,
    relevant_only: bool,
    summary: bool,
) -> None:
    """Print the visible module graph as JSON.

    PAYLOAD_PATH: JSON file with {"modules": [...], "root": "..."}.
    """
    session = _load_session(
        payload_path, vendor, virtual, out_of_root, search, filter_root, relevant_only
    )
    if summary:
        result: dict[str, Any] = {
            "modules": len(session.registry),
            **session.graph.summary(),
        }
    else:
        result = session.graph.to_json()
    click.echo(json.dumps(result, indent=2))


@cli.command()
@_view_options
@click.argument("module_id")
def detail(
    payload_path: str,
    vendor: bool,
    virtual: bool,
    out_of_root: bool,
    search: str,
    filter_root: str,
    relevant_only: bool,
    module_id: str,
) -> None:
    """Print the detail record (deps and references) for one module.

    PAYLOAD_PATH: JSON file with {"modules": [...], "root": "..."}.
    MODULE_ID: Normalized module id.
    """
    session = _load_session(
        payload_path, vendor, virtual, out_of_root, search, filter_root, relevant_only
    )
    record = session.select_node(module_id)
    if record is None:
        click.echo(f"Unknown module: {module_id}", err=True)
        sys.exit(1)
    click.echo(record.model_dump_json(indent=2))


@cli.command("legend")
def legend_command() -> None:
    """Print the file-type colour legend."""
    from modgraph.legend import legend

    click.echo(json.dumps([entry.model_dump() for entry in legend()], indent=2))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
