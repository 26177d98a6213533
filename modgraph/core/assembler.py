"""Graph assembly: registry -> visible, de-duplicated node/edge collections."""

import logging
from collections.abc import Iterable

from modgraph.core.paths import search_id
from modgraph.core.registry import ModuleRegistry
from modgraph.core.subgraph import expand_from_matches, extract_closure
from modgraph.core.visibility import is_visible
from modgraph.logging import log_operation, logger
from modgraph.models.graph import (
    DanglingEdge,
    EdgeResolution,
    GraphEdge,
    GraphNode,
    RegistryEntry,
    ResolvedEdge,
    VisibilitySettings,
    VisibleGraph,
)


def unique_nodes(nodes: Iterable[GraphNode]) -> list[GraphNode]:
    """Keep the first node for each id."""
    seen: dict[str, GraphNode] = {}
    for node in nodes:
        seen.setdefault(node.id, node)
    return list(seen.values())


def unique_edges(edges: Iterable[GraphEdge]) -> list[GraphEdge]:
    """Keep the first edge for each (from, to) pair."""
    seen: dict[tuple[str, str], GraphEdge] = {}
    for edge in edges:
        seen.setdefault(edge.key, edge)
    return list(seen.values())


def resolve_edges(edges: Iterable[GraphEdge], nodes: Iterable[GraphNode]) -> list[EdgeResolution]:
    """Tag each edge as resolved or dangling against a node set.

    Args:
        edges: Candidate edges.
        nodes: Nodes that will be rendered.

    Returns:
        One ResolvedEdge or DanglingEdge per input edge, in order.
    """
    by_id = {node.id: node for node in nodes}
    result: list[EdgeResolution] = []
    for edge in edges:
        node = by_id.get(edge.target)
        if node is not None and edge.source in by_id:
            result.append(ResolvedEdge(edge=edge, node=node))
        else:
            missing = edge.target if node is None else edge.source
            result.append(DanglingEdge(edge=edge, missing_id=missing))
    return result


class GraphAssembler:
    """Projects the registry into the visible graph for the current view state.

    View state (settings, search text, filter root) never mutates the
    registry; it only changes which entries are projected.
    """

    def __init__(self, registry: ModuleRegistry) -> None:
        self.registry = registry
        self.settings = VisibilitySettings()
        self.search_text = ""
        self.filter_root = ""
        self.graph = VisibleGraph()

    def clear(self) -> None:
        """Forget the last visible graph."""
        self.graph = VisibleGraph()

    def _source_entries(self) -> list[RegistryEntry]:
        if self.filter_root:
            return extract_closure(self.registry, self.filter_root)
        return self.registry.entries()

    def rebuild(self) -> VisibleGraph:
        """Recompute the visible graph from the registry and view state.

        Returns:
            The new visible graph (also stored as ``self.graph``).
        """
        details = {"modules": len(self.registry)}
        if self.filter_root:
            details["filter_root"] = self.filter_root
        if self.search_text.strip():
            details["search"] = repr(self.search_text.strip())

        with log_operation("rebuild", details, level=logging.DEBUG):
            retained = [
                entry
                for entry in self._source_entries()
                if is_visible(entry, self.settings, self.registry)
            ]
            nodes: list[GraphNode] = [entry.node for entry in retained]
            edges: list[GraphEdge] = [edge for entry in retained for edge in entry.edges]

            term = self.search_text.strip().lower()
            if term:
                matched = [entry for entry in retained if term in search_id(entry.id).lower()]
                if matched:
                    nodes, edges = expand_from_matches(matched, self.registry, self.settings)
                else:
                    logger.debug("Search %r matched no modules", term)
                    nodes, edges = [], []

            nodes = unique_nodes(nodes)
            resolutions = resolve_edges(unique_edges(edges), nodes)
            self.graph = VisibleGraph(
                nodes=nodes,
                edges=[r.edge for r in resolutions if isinstance(r, ResolvedEdge)],
                dangling=[r.edge for r in resolutions if isinstance(r, DanglingEdge)],
            )

        return self.graph
