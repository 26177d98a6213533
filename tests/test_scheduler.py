"""Tests for the debounced rebuild scheduler."""

import asyncio

import pytest

from modgraph.core.scheduler import DebouncedScheduler


class Counter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


class TestDebounce:
    """Timer behaviour on a running event loop."""

    @pytest.mark.asyncio
    async def test_runs_after_quiet_period(self) -> None:
        """The callback runs once the delay elapses."""
        counter = Counter()
        scheduler = DebouncedScheduler(counter, delay=0.02)

        scheduler.schedule()
        assert scheduler.pending
        assert counter.calls == 0

        await asyncio.sleep(0.08)
        assert counter.calls == 1
        assert not scheduler.pending

    @pytest.mark.asyncio
    async def test_burst_collapses_to_one_run(self) -> None:
        """Rapid schedule calls produce a single callback."""
        counter = Counter()
        scheduler = DebouncedScheduler(counter, delay=0.05)

        for _ in range(5):
            scheduler.schedule()
            await asyncio.sleep(0.01)

        assert counter.calls == 0
        await asyncio.sleep(0.15)
        assert counter.calls == 1

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_run(self) -> None:
        """A cancelled run never fires."""
        counter = Counter()
        scheduler = DebouncedScheduler(counter, delay=0.02)

        scheduler.schedule()
        scheduler.cancel()
        await asyncio.sleep(0.06)

        assert counter.calls == 0
        assert not scheduler.pending

    @pytest.mark.asyncio
    async def test_flush_runs_immediately(self) -> None:
        """flush runs the pending callback and disarms the timer."""
        counter = Counter()
        scheduler = DebouncedScheduler(counter, delay=10)

        scheduler.schedule()
        assert scheduler.flush() is True
        assert counter.calls == 1
        assert not scheduler.pending

        await asyncio.sleep(0.01)
        assert counter.calls == 1

    @pytest.mark.asyncio
    async def test_flush_without_pending_run(self) -> None:
        """flush with nothing pending does nothing."""
        counter = Counter()
        scheduler = DebouncedScheduler(counter, delay=0.02)

        assert scheduler.flush() is False
        assert counter.calls == 0


class TestWithoutLoop:
    """Behaviour outside an event loop."""

    def test_schedule_runs_immediately(self) -> None:
        """Without a running loop the callback runs synchronously."""
        counter = Counter()
        scheduler = DebouncedScheduler(counter, delay=10)

        scheduler.schedule()

        assert counter.calls == 1
        assert not scheduler.pending

    def test_default_delay_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The default delay comes from MODGRAPH_SEARCH_DEBOUNCE_MS."""
        monkeypatch.setenv("MODGRAPH_SEARCH_DEBOUNCE_MS", "120")

        assert DebouncedScheduler(Counter()).delay == pytest.approx(0.12)

    def test_default_delay(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without configuration the delay is 350ms."""
        monkeypatch.delenv("MODGRAPH_SEARCH_DEBOUNCE_MS", raising=False)

        assert DebouncedScheduler(Counter()).delay == pytest.approx(0.35)
