"""Runtime configuration for modgraph.

Configuration via environment variables (read at call time, not import time):
    MODGRAPH_SEARCH_DEBOUNCE_MS: Quiet period before a search rebuild (default 350)
    MODGRAPH_MAX_DEPTH: Depth bound for the isolate-to-module closure (default 20)
    MODGRAPH_LOG_LEVEL: Log level name for the modgraph logger (default INFO)
"""

import os

DEFAULT_SEARCH_DEBOUNCE_MS = 350
DEFAULT_MAX_DEPTH = 20
DEFAULT_LOG_LEVEL = "INFO"


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_search_debounce_seconds() -> float:
    """Get the search debounce delay in seconds."""
    return _get_int("MODGRAPH_SEARCH_DEBOUNCE_MS", DEFAULT_SEARCH_DEBOUNCE_MS) / 1000


def get_max_depth() -> int:
    """Get the maximum traversal depth for the isolate-to-module closure."""
    return _get_int("MODGRAPH_MAX_DEPTH", DEFAULT_MAX_DEPTH)


def get_log_level() -> str:
    """Get the configured log level name."""
    return os.getenv("MODGRAPH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
