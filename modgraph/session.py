"""Module graph session: the interaction surface used by UI collaborators.

One session owns a registry, the assembler projecting it, the search debounce
and the currently open drawer record. Settings and filter-root changes rebuild
synchronously; search text changes rebuild after the debounce period.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from modgraph.core.assembler import GraphAssembler
from modgraph.core.drawer import build_detail
from modgraph.core.paths import strip_verbose
from modgraph.core.registry import ModuleRegistry
from modgraph.core.scheduler import DebouncedScheduler
from modgraph.logging import log_operation, logger
from modgraph.models.graph import (
    DrawerRecord,
    GraphEdge,
    GraphNode,
    VisibilitySettings,
    VisibleGraph,
)


class ModuleGraphSession:
    """Stateful module graph view.

    Attributes:
        registry: Canonical module table and reference index.
        assembler: Projects the registry into the visible graph.
        scheduler: Debounce for search-driven rebuilds.
        drawer: Detail record of the selected module while the drawer is open.
    """

    def __init__(self, debounce: float | None = None) -> None:
        """Initialize an empty session.

        Args:
            debounce: Search debounce in seconds (default from
                MODGRAPH_SEARCH_DEBOUNCE_MS).
        """
        self.registry = ModuleRegistry()
        self.assembler = GraphAssembler(self.registry)
        self.scheduler = DebouncedScheduler(self.rebuild, delay=debounce)
        self.drawer: DrawerRecord | None = None

    @property
    def root(self) -> str:
        return self.registry.root

    @property
    def settings(self) -> VisibilitySettings:
        return self.assembler.settings

    @property
    def search_text(self) -> str:
        return self.assembler.search_text

    @property
    def filter_root(self) -> str:
        return self.assembler.filter_root

    @property
    def graph(self) -> VisibleGraph:
        return self.assembler.graph

    @property
    def nodes(self) -> list[GraphNode]:
        return self.assembler.graph.nodes

    @property
    def edges(self) -> list[GraphEdge]:
        return self.assembler.graph.edges

    @property
    def drawer_open(self) -> bool:
        return self.drawer is not None

    def ingest(self, modules: Iterable[Any] | None, root: str) -> VisibleGraph:
        """Replace all module data and rebuild the visible graph.

        Any pending debounced rebuild is dropped; the rebuild here reads the
        latest view state anyway.

        Args:
            modules: Complete raw module list from the build tool.
            root: Absolute project root.

        Returns:
            The new visible graph.
        """
        self.scheduler.cancel()
        self.drawer = None

        details: dict[str, Any] = {"root": root or "''"}
        if isinstance(modules, list):
            details["modules"] = len(modules)

        with log_operation("ingest", details):
            self.registry.ingest(modules, root)
        return self.rebuild()

    def rebuild(self) -> VisibleGraph:
        """Recompute the visible graph now. Closes the drawer."""
        self.drawer = None
        return self.assembler.rebuild()

    def set_visibility_settings(
        self, partial: Mapping[str, bool] | VisibilitySettings | None
    ) -> VisibleGraph:
        """Apply visibility toggles and rebuild synchronously.

        Raises:
            ValueError: If a toggle name is unknown.
        """
        self.assembler.settings = self.assembler.settings.merged(partial)
        return self.rebuild()

    def set_filter_root(self, module_id: str) -> VisibleGraph:
        """Isolate the graph to one module's closure and rebuild synchronously.

        An empty id clears the filter. An unknown id yields an empty graph.
        """
        self.assembler.filter_root = strip_verbose(module_id) if module_id else ""
        return self.rebuild()

    def set_search_text(self, text: str) -> None:
        """Store the search text and schedule a debounced rebuild."""
        self.assembler.search_text = text or ""
        self.scheduler.schedule()

    def flush(self) -> VisibleGraph:
        """Run a pending debounced rebuild immediately, if any."""
        self.scheduler.flush()
        return self.graph

    def select_node(self, module_id: str) -> DrawerRecord | None:
        """Open the drawer for a module.

        Returns:
            The detail record, or None (drawer closed) if the id is unknown.
        """
        self.drawer = build_detail(self.registry, module_id, self.assembler.settings)
        if self.drawer is None:
            logger.debug("No detail for unknown module: %s", module_id)
        return self.drawer

    def close_drawer(self) -> None:
        self.drawer = None

    def reset(self) -> None:
        """Drop all module data and the visible graph; keep view settings."""
        self.scheduler.cancel()
        self.registry.clear()
        self.registry.root = ""
        self.assembler.clear()
        self.drawer = None
