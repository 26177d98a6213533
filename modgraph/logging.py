"""Logging configuration for modgraph.

Logs to stderr (stdout is reserved for CLI output and the MCP protocol).
"""

import logging
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from modgraph.config import get_log_level

# Create logger that outputs to stderr
logger = logging.getLogger("modgraph")
logger.setLevel(getattr(logging, get_log_level(), logging.INFO))

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "[modgraph] %(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


@dataclass
class TimingContext:
    """Elapsed time of one logged operation, filled in when it ends."""

    operation: str
    started: float = field(default_factory=time.perf_counter)
    elapsed: float = 0.0

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

    def stop(self) -> None:
        self.elapsed = time.perf_counter() - self.started


@contextmanager
def log_operation(
    operation: str,
    details: dict[str, Any] | None = None,
    level: int = logging.INFO,
) -> Generator[TimingContext, None, None]:
    """Log the start and end of an operation with its duration.

    Failures are logged at ERROR and re-raised.

    Args:
        operation: Name of the operation.
        details: Optional key/value pairs appended to the start message.
        level: Log level for the start/completion messages.

    Yields:
        TimingContext whose elapsed time is set once the block exits.
    """
    suffix = "".join(f" {key}={value}" for key, value in (details or {}).items())
    logger.log(level, "▶ Starting %s%s", operation, suffix)

    timing = TimingContext(operation)
    try:
        yield timing
    except Exception as e:
        timing.stop()
        logger.error("✗ %s failed after %.1fms: %s", operation, timing.elapsed_ms, e)
        raise
    timing.stop()
    logger.log(level, "✓ Completed %s in %.1fms", operation, timing.elapsed_ms)
