"""Debounced recompute scheduling.

Holds at most one pending timer. Every ``schedule`` call cancels the pending
timer before arming a new one, so a burst of keystrokes produces a single
rebuild once input has been quiet for ``delay`` seconds.
"""

import asyncio
from collections.abc import Callable

from modgraph.config import get_search_debounce_seconds
from modgraph.logging import logger


class DebouncedScheduler:
    """Single-slot debounce timer on the running asyncio event loop.

    Outside an event loop (e.g. the CLI) there is no user input to debounce
    against, so ``schedule`` runs the callback immediately.
    """

    def __init__(self, callback: Callable[[], object], delay: float | None = None) -> None:
        """Initialize the scheduler.

        Args:
            callback: Function to run once the quiet period ends.
            delay: Quiet period in seconds (default from
                MODGRAPH_SEARCH_DEBOUNCE_MS, 350ms).
        """
        self._callback = callback
        self.delay = get_search_debounce_seconds() if delay is None else delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """Whether a rebuild is waiting for the quiet period to end."""
        return self._handle is not None

    def schedule(self) -> None:
        """Cancel any pending run and arm a new one."""
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._callback()
            return
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Cancelled pending debounced rebuild")

    def flush(self) -> bool:
        """Run the pending callback now instead of waiting.

        Returns:
            True if a pending run was flushed.
        """
        if self._handle is None:
            return False
        self.cancel()
        self._callback()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._callback()
