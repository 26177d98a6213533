"""Graph data models for module graph inspection.

Includes Pydantic models for serialization and NetworkX conversion utilities.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

import networkx as nx
from pydantic import BaseModel, Field

# Font colour used by renderers for nodes that matched the search text
HIGHLIGHT_COLOR = "#F19B4A"

# Setting names used by the devtools client settings panel
_LEGACY_SETTING_KEYS = {
    "node_modules": "show_vendor",
    "virtual": "show_virtual",
    "lib": "show_out_of_root",
}


class ModuleRecord(BaseModel):
    """A module as reported by the build tool."""

    id: str = Field(description="Build-tool module identifier (path-like, may carry ?query/#hash)")
    deps: list[str] = Field(default_factory=list, description="Raw dependency identifiers")
    virtual: bool = Field(default=False, description="Synthetic module with no real file")

    @classmethod
    def coerce(cls, raw: Any) -> "ModuleRecord | None":
        """Build a record from loosely-shaped input.

        Malformed dependency lists become empty and non-string deps are
        dropped. Entries without a usable string id yield None.

        Args:
            raw: A ModuleRecord or a mapping with id/deps/virtual keys.

        Returns:
            A ModuleRecord, or None if the entry has no usable id.
        """
        if isinstance(raw, ModuleRecord):
            return raw
        if not isinstance(raw, Mapping):
            return None

        module_id = raw.get("id")
        if not isinstance(module_id, str) or not module_id:
            return None

        deps = raw.get("deps")
        if not isinstance(deps, (list, tuple)):
            deps = []

        return cls(
            id=module_id,
            deps=[dep for dep in deps if isinstance(dep, str)],
            virtual=bool(raw.get("virtual", False)),
        )


class GraphNode(BaseModel):
    """A node descriptor handed to the rendering collaborator."""

    id: str = Field(description="Normalized module id")
    label: str = Field(description="Display name (last path segment)")
    group: str = Field(description="File extension or 'other'")
    size: float = Field(description="15 + min(edge_count / 2, 8)")
    shape: Literal["hexagon", "diamond", "dot"] = Field(
        description="hexagon = vendor module, diamond = virtual module, dot = other"
    )
    highlighted: bool = Field(default=False, description="Whether the node matched the search text")


class GraphEdge(BaseModel):
    """A directed edge from a module to one of its dependencies."""

    source: str = Field(alias="from", description="Depending module id")
    target: str = Field(alias="to", description="Dependency module id")
    directed: bool = Field(default=True)

    model_config = {"populate_by_name": True}

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the edge for de-duplication."""
        return (self.source, self.target)


class ReferenceEntry(BaseModel):
    """A back-link from a dependency to one module that depends on it."""

    path: str = Field(description="Referencing module id")
    display_path: str = Field(description="Referencing module id relative to the project root")
    module: ModuleRecord = Field(description="The referencing module")


class RegistryEntry(BaseModel):
    """Canonical registry record for one normalized module id."""

    module: ModuleRecord = Field(description="Normalized module (deduplicated deps)")
    node: GraphNode = Field(description="Visual node descriptor")
    edges: list[GraphEdge] = Field(default_factory=list, description="Outgoing edges")
    display_name: str = Field(description="Last path segment")
    display_path: str = Field(description="Root-relative path")

    @property
    def id(self) -> str:
        return self.module.id


class VisibilitySettings(BaseModel):
    """Three independent toggles controlling which modules are shown."""

    show_vendor: bool = Field(default=False, description="Show modules under node_modules")
    show_virtual: bool = Field(default=False, description="Show virtual modules")
    show_out_of_root: bool = Field(
        default=False, description="Show non-virtual modules outside the project root"
    )

    def merged(self, partial: "Mapping[str, bool] | VisibilitySettings | None") -> "VisibilitySettings":
        """Return a copy with the given toggles applied.

        Args:
            partial: Toggles to change, keyed by field name or by the
                client's legacy names (node_modules, virtual, lib).

        Returns:
            Updated settings.

        Raises:
            ValueError: If a key is not a known toggle.
        """
        if partial is None:
            return self.model_copy()
        if isinstance(partial, VisibilitySettings):
            return partial.model_copy()

        update: dict[str, bool] = {}
        for key, value in partial.items():
            field_name = _LEGACY_SETTING_KEYS.get(key, key)
            if field_name not in VisibilitySettings.model_fields:
                raise ValueError(f"Unknown visibility setting: {key}")
            update[field_name] = bool(value)
        return self.model_copy(update=update)


class DrawerLink(BaseModel):
    """A dependency or reference shown in the detail drawer."""

    path: str = Field(description="Module id")
    display_path: str = Field(description="Root-relative module id")


class DrawerRecord(BaseModel):
    """Read-only detail projection for one selected module."""

    name: str = Field(description="Display name")
    display_path: str = Field(description="Root-relative path")
    path: str = Field(description="Module id")
    deps: list[DrawerLink] = Field(default_factory=list, description="Visible dependencies")
    refs: list[DrawerLink] = Field(default_factory=list, description="Visible referencing modules")


class ResolvedEdge(BaseModel):
    """An edge whose target is present in the node set."""

    kind: Literal["resolved"] = "resolved"
    edge: GraphEdge
    node: GraphNode


class DanglingEdge(BaseModel):
    """An edge whose target is missing from (or hidden in) the node set."""

    kind: Literal["dangling"] = "dangling"
    edge: GraphEdge
    missing_id: str


EdgeResolution = Annotated[ResolvedEdge | DanglingEdge, Field(discriminator="kind")]


class VisibleGraph(BaseModel):
    """The de-duplicated node/edge collections currently on screen."""

    nodes: list[GraphNode] = Field(default_factory=list, description="Visible nodes")
    edges: list[GraphEdge] = Field(default_factory=list, description="Edges between visible nodes")
    dangling: list[GraphEdge] = Field(
        default_factory=list,
        description="Edges dropped because their target is not a visible node",
    )

    def to_json(self) -> dict[str, Any]:
        """Serialize with the renderer's from/to edge keys."""
        return self.model_dump(by_alias=True)

    def to_digraph(self) -> nx.DiGraph:
        """Convert the visible graph to a NetworkX DiGraph.

        Returns:
            Directed graph with node descriptors as node attributes.
        """
        G = nx.DiGraph()
        for node in self.nodes:
            G.add_node(
                node.id,
                label=node.label,
                group=node.group,
                size=node.size,
                shape=node.shape,
                highlighted=node.highlighted,
            )
        for edge in self.edges:
            G.add_edge(edge.source, edge.target)
        return G

    def summary(self) -> dict[str, int]:
        """Count nodes, edges, dangling edges and weakly connected components."""
        G = self.to_digraph()
        components = nx.number_weakly_connected_components(G) if G.number_of_nodes() else 0
        return {
            "node_count": G.number_of_nodes(),
            "edge_count": G.number_of_edges(),
            "dangling_count": len(self.dangling),
            "component_count": components,
        }
