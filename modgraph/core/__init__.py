"""Graph core: registry, visibility policy, traversal and assembly."""

from modgraph.core.assembler import GraphAssembler, resolve_edges, unique_edges, unique_nodes
from modgraph.core.drawer import build_detail
from modgraph.core.paths import strip_verbose, to_display_path
from modgraph.core.registry import ModuleRegistry
from modgraph.core.scheduler import DebouncedScheduler
from modgraph.core.subgraph import expand_from_matches, extract_closure
from modgraph.core.visibility import is_directly_visible, is_visible

__all__ = [
    "DebouncedScheduler",
    "GraphAssembler",
    "ModuleRegistry",
    "build_detail",
    "expand_from_matches",
    "extract_closure",
    "is_directly_visible",
    "is_visible",
    "resolve_edges",
    "strip_verbose",
    "to_display_path",
    "unique_edges",
    "unique_nodes",
]
