"""Detail record for a selected module."""

from modgraph.core.paths import strip_verbose, to_display_path
from modgraph.core.registry import ModuleRegistry
from modgraph.core.visibility import is_directly_visible
from modgraph.models.graph import DrawerLink, DrawerRecord, VisibilitySettings


def build_detail(
    registry: ModuleRegistry,
    module_id: str,
    settings: VisibilitySettings,
) -> DrawerRecord | None:
    """Build the drawer record for one module.

    Dependencies and referencing modules that are not in the registry, or
    that the current settings hide, are left out.

    Args:
        registry: Module registry.
        module_id: Normalized module id.
        settings: Current visibility toggles.

    Returns:
        The detail record, or None if the id is unknown.
    """
    entry = registry.get(module_id)
    if entry is None:
        return None

    deps: list[DrawerLink] = []
    for dep in entry.module.deps:
        dep_entry = registry.get(dep)
        if dep_entry is None:
            continue
        if is_directly_visible(dep_entry.module, settings, registry.root):
            deps.append(
                DrawerLink(path=dep, display_path=to_display_path(strip_verbose(dep), registry.root))
            )

    refs: list[DrawerLink] = []
    for ref in registry.references(entry.id):
        ref_entry = registry.get(ref.path)
        if ref_entry is None:
            continue
        if is_directly_visible(ref_entry.module, settings, registry.root):
            refs.append(DrawerLink(path=ref.path, display_path=ref.display_path))

    return DrawerRecord(
        name=entry.display_name,
        display_path=entry.display_path,
        path=entry.id,
        deps=deps,
        refs=refs,
    )
