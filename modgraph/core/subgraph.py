"""Subgraph extraction over the module registry.

Two traversals with different intent:
- extract_closure: isolate-to-module, the depth-bounded transitive closure of
  forward dependencies from one root.
- expand_from_matches: one-hop expansion around search hits, showing what each
  match depends on using the edges already computed by the registry.
"""

from collections.abc import Iterable

from modgraph.config import get_max_depth
from modgraph.core.registry import ModuleRegistry
from modgraph.core.visibility import is_directly_visible
from modgraph.logging import logger
from modgraph.models.graph import GraphEdge, GraphNode, RegistryEntry, VisibilitySettings


def extract_closure(
    registry: ModuleRegistry,
    root_id: str,
    max_depth: int | None = None,
) -> list[RegistryEntry]:
    """Collect the root and every module reachable through forward deps.

    Depth-first, pre-order, in dependency-list order. The root counts as
    depth 1; branches deeper than ``max_depth`` are silently cut off. A module
    reachable through several paths appears once.

    Args:
        registry: Module registry to traverse.
        root_id: Normalized id of the module to isolate.
        max_depth: Depth bound (default from MODGRAPH_MAX_DEPTH, 20).

    Returns:
        Registry entries in visit order, or an empty list if the root is
        unknown.
    """
    if max_depth is None:
        max_depth = get_max_depth()

    if root_id not in registry:
        logger.debug("Filter root not in registry: %s", root_id)
        return []

    result: list[RegistryEntry] = []
    visited: set[str] = set()
    stack: list[tuple[str, int]] = [(root_id, 1)]

    while stack:
        module_id, depth = stack.pop()
        if module_id in visited or depth > max_depth:
            continue

        entry = registry.get(module_id)
        if entry is None:
            continue

        visited.add(module_id)
        result.append(entry)

        # Reversed so the first dependency is expanded first
        for dep in reversed(entry.module.deps):
            if dep not in visited and dep in registry:
                stack.append((dep, depth + 1))

    return result


def expand_from_matches(
    matched: Iterable[RegistryEntry],
    registry: ModuleRegistry,
    settings: VisibilitySettings,
) -> tuple[list[GraphNode], list[GraphEdge]]:
    """Build the focused view around search hits.

    Each match is marked as highlighted. Each of its direct dependencies that
    is in the registry and passes the direct classification contributes its
    node, a match -> dependency edge, and its own outgoing edges.

    Args:
        matched: Entries whose search id matched the search text.
        registry: Module registry for dependency lookup.
        settings: Current visibility toggles.

    Returns:
        Tuple of (nodes, edges), de-duplicated by id and by (from, to).
    """
    nodes: dict[str, GraphNode] = {}
    edges: dict[tuple[str, str], GraphEdge] = {}

    for entry in matched:
        nodes[entry.id] = entry.node.model_copy(update={"highlighted": True})

        for dep in entry.module.deps:
            dep_entry = registry.get(dep)
            if dep_entry is None:
                continue
            if not is_directly_visible(dep_entry.module, settings, registry.root):
                continue

            if dep_entry.id not in nodes:
                nodes[dep_entry.id] = dep_entry.node

            edge = GraphEdge(source=entry.id, target=dep_entry.id)
            edges.setdefault(edge.key, edge)
            for dep_edge in dep_entry.edges:
                edges.setdefault(dep_edge.key, dep_edge)

    return list(nodes.values()), list(edges.values())
