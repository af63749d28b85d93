"""Unit tests for click disambiguation."""

import asyncio
from unittest.mock import MagicMock

import pytest

from scopeview.core.errors import ScopeViewError
from scopeview.interaction.clicks import AsyncioScheduler, ClickDisambiguator, ClickPhase, ManualScheduler


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def handlers():
    return MagicMock(), MagicMock()


@pytest.fixture
def clicks(scheduler, handlers):
    on_single, on_double = handlers
    return ClickDisambiguator(scheduler, on_single=on_single, on_double=on_double, window=0.4)


class TestManualScheduler:
    def test_fires_when_due(self, scheduler):
        callback = MagicMock()
        scheduler.call_later(1.0, callback)

        scheduler.advance(0.5)
        callback.assert_not_called()
        scheduler.advance(0.5)
        callback.assert_called_once()

    def test_cancelled_never_fires(self, scheduler):
        callback = MagicMock()
        handle = scheduler.call_later(1.0, callback)
        handle.cancel()

        scheduler.advance(5.0)
        callback.assert_not_called()
        assert scheduler.pending == 0


class TestClickDisambiguator:
    def test_first_click_arms(self, clicks, handlers):
        clicks.click("scope:a")

        assert clicks.phase == ClickPhase.ARMED
        handlers[0].assert_not_called()
        handlers[1].assert_not_called()

    def test_single_click_resolves_after_window(self, clicks, scheduler, handlers):
        on_single, on_double = handlers
        clicks.click("scope:a")
        scheduler.advance(0.41)

        on_single.assert_called_once_with("scope:a")
        on_double.assert_not_called()
        assert clicks.phase == ClickPhase.IDLE

    def test_double_click_within_window(self, clicks, scheduler, handlers):
        on_single, on_double = handlers
        clicks.click("scope:a")
        scheduler.advance(0.2)
        clicks.click("scope:a")
        scheduler.advance(1.0)

        on_double.assert_called_once_with("scope:a")
        on_single.assert_not_called()
        assert clicks.phase == ClickPhase.IDLE

    def test_two_slow_clicks_are_two_singles(self, clicks, scheduler, handlers):
        on_single, on_double = handlers
        clicks.click("scope:a")
        scheduler.advance(0.5)
        clicks.click("scope:a")
        scheduler.advance(0.5)

        assert on_single.call_count == 2
        on_double.assert_not_called()

    def test_flush_resolves_immediately(self, clicks, scheduler, handlers):
        on_single, _ = handlers
        clicks.click("scope:a")
        clicks.flush()

        on_single.assert_called_once_with("scope:a")
        scheduler.advance(1.0)
        on_single.assert_called_once()

    def test_cancel_drops_pending(self, clicks, scheduler, handlers):
        on_single, on_double = handlers
        clicks.click("scope:a")
        clicks.cancel()
        scheduler.advance(1.0)

        on_single.assert_not_called()
        on_double.assert_not_called()
        assert scheduler.pending == 0

    def test_scheduler_failure_leaves_machine_idle(self, handlers):
        on_single, on_double = handlers
        failing = MagicMock()
        failing.call_later.side_effect = RuntimeError("no loop")
        clicks = ClickDisambiguator(failing, on_single=on_single, on_double=on_double, window=0.4)

        with pytest.raises(RuntimeError):
            clicks.click("scope:a")

        assert clicks.phase == ClickPhase.IDLE
        failing.call_later.side_effect = None
        clicks.click("scope:a")

        on_double.assert_not_called()
        assert clicks.phase == ClickPhase.ARMED


class TestAsyncioScheduler:
    def test_without_running_loop(self):
        with pytest.raises(ScopeViewError, match="No running event loop"):
            AsyncioScheduler().call_later(0.4, MagicMock())

    def test_fires_on_running_loop(self):
        callback = MagicMock()

        async def run():
            AsyncioScheduler().call_later(0.01, callback)
            await asyncio.sleep(0.05)

        asyncio.run(run())
        callback.assert_called_once()
