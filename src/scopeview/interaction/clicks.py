"""
Single versus double click disambiguation.

A click on a metanode cannot be classified until the debounce window has
passed. The first click arms a cancellable deferred callback; a second
qualifying click before it fires cancels it and resolves as a double click.

The timer comes from an injected Scheduler so the state machine runs the
same way against a real event loop and against a virtual clock in tests.
"""

import asyncio
import heapq
import itertools
import logging
from enum import StrEnum
from typing import Callable, List, Optional, Protocol, Tuple

from ..config import DEBOUNCE_WINDOW_SECONDS
from ..core.errors import ScopeViewError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay and cancel it."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise ScopeViewError(
                    "No running event loop for click timers; pass a loop or another scheduler"
                ) from e
        return loop.call_later(delay, callback)


class _ManualHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Nothing fires until `advance()` moves the clock past a callback's due
    time. Callbacks due at the same instant run in scheduling order.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle()
        heapq.heappush(self._queue, (self.now + delay, next(self._counter), handle, callback))
        return handle

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self.now = due
            if not handle.cancelled:
                callback()
        self.now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)


class ClickPhase(StrEnum):
    IDLE = "idle"
    ARMED = "armed"


class ClickDisambiguator:
    """
    Two-state machine: IDLE and ARMED.

    IDLE + click   -> ARMED, deferred single-click callback scheduled.
    ARMED + click  -> IDLE, callback cancelled, `on_double(target)`.
    ARMED + window -> IDLE, `on_single(first target)`.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_single: Callable[[str], None],
        on_double: Callable[[str], None],
        window: float = DEBOUNCE_WINDOW_SECONDS,
    ):
        self._scheduler = scheduler
        self._on_single = on_single
        self._on_double = on_double
        self.window = window
        self.phase = ClickPhase.IDLE
        self._armed_target: Optional[str] = None
        self._handle: Optional[TimerHandle] = None

    def click(self, target: str) -> None:
        if self.phase == ClickPhase.ARMED:
            self._disarm()
            logger.debug(f"Double click on {target}")
            self._on_double(target)
            return

        # a scheduler failure must leave the machine idle
        self._handle = self._scheduler.call_later(self.window, self._expire)
        self.phase = ClickPhase.ARMED
        self._armed_target = target
        logger.debug(f"Armed click timer for {target}")

    def flush(self) -> None:
        """Resolve a pending click as a single click right now."""
        if self.phase != ClickPhase.ARMED:
            return
        target = self._disarm()
        self._on_single(target)

    def cancel(self) -> None:
        """Drop a pending click without resolving it."""
        if self.phase == ClickPhase.ARMED:
            self._disarm()

    def _expire(self) -> None:
        if self.phase != ClickPhase.ARMED:
            return
        self._handle = None
        target = self._disarm()
        logger.debug(f"Single click on {target}")
        self._on_single(target)

    def _disarm(self) -> str:
        if self._handle is not None:
            self._handle.cancel()
        target = self._armed_target
        self.phase = ClickPhase.IDLE
        self._armed_target = None
        self._handle = None
        return target
