"""Visibility policy for registry entries.

A module is visible when it passes its own classification (vendor, virtual,
out-of-root) and has at least one acceptable referencer. Virtual referencers
always count as acceptable, so hiding loader-injected virtual modules does not
orphan the user code they pull in.
"""

from modgraph.core.paths import is_in_root, is_vendor_module
from modgraph.core.registry import ModuleRegistry
from modgraph.models.graph import ModuleRecord, RegistryEntry, VisibilitySettings


def is_directly_visible(module: ModuleRecord, settings: VisibilitySettings, root: str) -> bool:
    """Check a module against the vendor > virtual > out-of-root classification.

    Args:
        module: Normalized module record.
        settings: Current visibility toggles.
        root: Project root.

    Returns:
        False if the module falls into a hidden class, True otherwise.
    """
    vendor = is_vendor_module(module.id)
    if vendor:
        return settings.show_vendor
    if module.virtual:
        return settings.show_virtual
    if not is_in_root(module.id, root):
        return settings.show_out_of_root
    return True


def _is_acceptable_referencer(module: ModuleRecord, settings: VisibilitySettings, root: str) -> bool:
    if module.virtual:
        return True
    if not settings.show_vendor and is_vendor_module(module.id):
        return False
    if not settings.show_out_of_root and not is_in_root(module.id, root):
        return False
    return True


def has_valid_referencer(
    module_id: str,
    settings: VisibilitySettings,
    registry: ModuleRegistry,
) -> bool:
    """Check the reference leniency rule.

    Args:
        module_id: Normalized module id.
        settings: Current visibility toggles.
        registry: Registry holding the reference index.

    Returns:
        True if the module has no references, or at least one referencer that
        is virtual or not excluded by the vendor/out-of-root rules.
    """
    refs = registry.references(module_id)
    if not refs:
        return True
    return any(
        _is_acceptable_referencer(ref.module, settings, registry.root) for ref in refs
    )


def is_visible(
    entry: RegistryEntry,
    settings: VisibilitySettings,
    registry: ModuleRegistry,
) -> bool:
    """Decide whether a registry entry belongs in the visible graph."""
    return is_directly_visible(entry.module, settings, registry.root) and has_valid_referencer(
        entry.id, settings, registry
    )
