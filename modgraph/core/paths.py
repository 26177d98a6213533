"""Module id normalization and path classification.

Build tools hand out ids such as ``/app/src/App.vue?vue&type=script#x`` or
``/app//node_modules/react/index.js``; everything here works on plain
``/``-separated strings and never touches the filesystem.
"""

import re

# Marker substrings of loader-produced style artifacts
STYLE_MARKERS = ("vue&type=style", "?type=style")

# Path segment used by the package manager for third-party code
VENDOR_DIR = "node_modules"

# Number of trailing path segments matched against the search text
SEARCH_SEGMENTS = 3

_QUERY_OR_HASH_RE = re.compile(r"[?#].*$", re.DOTALL)
_REPEATED_SLASH_RE = re.compile(r"/{2,}")
_FILE_EXT_RE = re.compile(r"\.(\w+)$")


def strip_verbose(module_id: str) -> str:
    """Drop query/hash suffixes and collapse repeated slashes.

    Args:
        module_id: Raw build-tool module id.

    Returns:
        The normalized id. Applying this twice gives the same result.
    """
    return _REPEATED_SLASH_RE.sub("/", _QUERY_OR_HASH_RE.sub("", module_id))


def to_display_path(module_id: str, root: str) -> str:
    """Make a module id relative to the project root.

    Args:
        module_id: Normalized module id.
        root: Project root. An empty root leaves the id unchanged.

    Returns:
        The id without its leading root, or the id unchanged when it does
        not start with the root.
    """
    if root and module_id.startswith(root):
        return module_id[len(root):]
    return module_id


def is_style_module(module_id: str) -> bool:
    """Check if an id is a style-only artifact produced by a loader."""
    return any(marker in module_id for marker in STYLE_MARKERS)


def is_vendor_module(module_id: str) -> bool:
    """Check if an id lives under a node_modules directory."""
    return VENDOR_DIR in module_id.split("/")


def is_in_root(module_id: str, root: str) -> bool:
    """Check if an id lies under the project root."""
    return module_id.startswith(root)


def display_name(module_id: str) -> str:
    """Last path segment of a module id."""
    return module_id.rsplit("/", 1)[-1]


def file_group(module_id: str) -> str:
    """File extension used as the node group, or 'other'."""
    match = _FILE_EXT_RE.search(module_id)
    return match.group(1) if match else "other"


def search_id(module_id: str, segments: int = SEARCH_SEGMENTS) -> str:
    """Shortened id the search text is matched against.

    Args:
        module_id: Normalized module id.
        segments: Number of trailing path segments to keep.

    Returns:
        The last ``segments`` path segments joined by '/', or the full id
        when it has fewer segments.
    """
    parts = module_id.split("/")
    if len(parts) <= segments:
        return module_id
    return "/".join(parts[-segments:])
