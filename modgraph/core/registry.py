"""Module registry and reference index.

The registry holds exactly one entry per normalized module id. ``ingest``
always rebuilds it (and the reverse reference index) from scratch; duplicate
ids inside one input list are merged into the first entry.
"""

from collections.abc import Iterable, Iterator
from typing import Any

import networkx as nx

from modgraph.core.paths import (
    display_name,
    file_group,
    is_style_module,
    is_vendor_module,
    strip_verbose,
    to_display_path,
)
from modgraph.logging import logger
from modgraph.models.graph import (
    GraphEdge,
    GraphNode,
    ModuleRecord,
    ReferenceEntry,
    RegistryEntry,
)


def determine_node_size(edge_count: int) -> float:
    """Node size grows with fan-out: base 15, capped at 23."""
    return 15 + min(edge_count / 2, 8)


def classify_shape(module_id: str, virtual: bool) -> str:
    """Vendor modules are hexagons, virtual ones diamonds, the rest dots."""
    if is_vendor_module(module_id):
        return "hexagon"
    if virtual:
        return "diamond"
    return "dot"


def unique_deps(deps: Iterable[str]) -> list[str]:
    """Normalize dependency ids, dropping style artifacts and repeats.

    Args:
        deps: Raw dependency ids.

    Returns:
        Normalized ids in first-seen order.
    """
    result: list[str] = []
    seen: set[str] = set()
    for dep in deps:
        if is_style_module(dep):
            continue
        clean = strip_verbose(dep)
        if clean in seen:
            continue
        seen.add(clean)
        result.append(clean)
    return result


class ModuleRegistry:
    """Canonical table of modules plus the reverse reference index."""

    def __init__(self) -> None:
        self.root: str = ""
        self._entries: dict[str, RegistryEntry] = {}
        self._references: dict[str, list[ReferenceEntry]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._entries

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries.values())

    def get(self, module_id: str) -> RegistryEntry | None:
        """Look up an entry by normalized id."""
        return self._entries.get(module_id)

    def entries(self) -> list[RegistryEntry]:
        """All entries in ingestion order."""
        return list(self._entries.values())

    def references(self, module_id: str) -> list[ReferenceEntry]:
        """Modules that list ``module_id`` as a dependency, in ingestion order."""
        return list(self._references.get(module_id, []))

    def clear(self) -> None:
        """Drop all entries and references."""
        self._entries.clear()
        self._references.clear()

    def ingest(self, modules: Iterable[Any] | None, root: str) -> None:
        """Rebuild the registry from a complete raw module list.

        Never raises on malformed input: entries without a usable id are
        skipped and malformed dependency lists are treated as empty.

        Args:
            modules: Raw module records (ModuleRecord or mappings).
            root: Absolute project root used for display paths.
        """
        self.clear()
        self.root = root or ""
        if not modules:
            return

        skipped = 0
        for raw in modules:
            record = ModuleRecord.coerce(raw)
            if record is None:
                skipped += 1
                continue
            if is_style_module(record.id):
                continue

            module_id = strip_verbose(record.id)
            existing = self._entries.get(module_id)
            if existing is not None:
                self._merge(existing, record.deps)
            else:
                self._add(module_id, record)

        if skipped:
            logger.debug("Skipped %d malformed module records", skipped)
        logger.debug(
            "Registry rebuilt: %d modules, %d referenced ids",
            len(self._entries),
            len(self._references),
        )

    def _add(self, module_id: str, record: ModuleRecord) -> None:
        module = ModuleRecord(id=module_id, deps=unique_deps(record.deps), virtual=record.virtual)
        edges = [GraphEdge(source=module_id, target=dep) for dep in module.deps]
        entry = RegistryEntry(
            module=module,
            node=GraphNode(
                id=module_id,
                label=display_name(module_id),
                group=file_group(module_id),
                size=determine_node_size(len(edges)),
                shape=classify_shape(module_id, record.virtual),
            ),
            edges=edges,
            display_name=display_name(module_id),
            display_path=to_display_path(module_id, self.root),
        )
        self._entries[module_id] = entry
        for dep in module.deps:
            self._add_reference(dep, entry)

    def _merge(self, entry: RegistryEntry, raw_deps: list[str]) -> None:
        known = set(entry.module.deps)
        incremental = [dep for dep in unique_deps(raw_deps) if dep not in known]
        if not incremental:
            return

        entry.module.deps.extend(incremental)
        for dep in incremental:
            entry.edges.append(GraphEdge(source=entry.id, target=dep))
            self._add_reference(dep, entry)
        entry.node.size = determine_node_size(len(entry.edges))

    def _add_reference(self, dep: str, entry: RegistryEntry) -> None:
        refs = self._references.setdefault(dep, [])
        for ref in refs:
            if ref.path == entry.id and ref.display_path == entry.display_path:
                return
        refs.append(
            ReferenceEntry(path=entry.id, display_path=entry.display_path, module=entry.module)
        )

    def to_digraph(self) -> nx.DiGraph:
        """Convert the full registry to a NetworkX DiGraph.

        Edge targets that were never ingested are added as bare nodes.

        Returns:
            Directed graph keyed by normalized module id.
        """
        G = nx.DiGraph()
        for entry in self._entries.values():
            G.add_node(
                entry.id,
                label=entry.node.label,
                group=entry.node.group,
                shape=entry.node.shape,
                virtual=entry.module.virtual,
            )
        for entry in self._entries.values():
            G.add_edges_from(edge.key for edge in entry.edges)
        return G
