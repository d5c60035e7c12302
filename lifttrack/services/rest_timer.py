"""Rest timer: countdown between sets with drift correction across suspend/resume.

The state machine is host-agnostic. Time, the recurring tick and page
visibility come in through three small capabilities (Clock, Scheduler,
VisibilitySignal) so tests can drive it with a fake clock.

While the host is hidden the tick is cancelled; on show the elapsed wall-clock
time is applied as one corrective decrement and the tick is reinstalled, so no
second is ever counted by both mechanisms.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Callable
from typing import Protocol

from lifttrack.core.constants import (
    REST_TIMER_MIN_SECONDS,
    REST_TIMER_TICK_SECONDS,
    VIBRATION_PATTERN,
)
from lifttrack.schemas.rest_timer import IDLE_STATE, RestTimerState

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[tuple[int, ...]], None]


# ── Host capabilities ────────────────────────────────────────────────────


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    def now(self) -> float:
        """Wall-clock seconds."""
        ...


class Scheduler(Protocol):
    def every(self, interval: float, callback: Callable[[], None]) -> Cancellable: ...


class VisibilitySignal(Protocol):
    def subscribe(self, callback: Callable[[bool], None]) -> Cancellable:
        """callback(True) on hide, callback(False) on show."""
        ...


class SystemClock:
    def now(self) -> float:
        return time.time()


class _RepeatingCall:
    """Re-arms loop.call_later after each run until cancelled."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle = loop.call_later(interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._interval, self._run)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()


class AsyncioScheduler:
    """Recurring callbacks on an asyncio event loop (running loop by default)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def every(self, interval: float, callback: Callable[[], None]) -> Cancellable:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingCall(loop, interval, callback)


class _Subscription:
    def __init__(self, listeners: list[Callable[[bool], None]], callback: Callable[[bool], None]):
        self._listeners = listeners
        self._callback = callback

    def cancel(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class VisibilityBroadcaster:
    """Edge-triggered hide/show fan-out. The host calls hide()/show();
    repeated calls in the same direction are ignored."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[bool], None]] = []
        self._hidden = False

    def subscribe(self, callback: Callable[[bool], None]) -> Cancellable:
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)

    def hide(self) -> None:
        if self._hidden:
            return
        self._hidden = True
        self._emit(True)

    def show(self) -> None:
        if not self._hidden:
            return
        self._hidden = False
        self._emit(False)

    def _emit(self, hidden: bool) -> None:
        for listener in list(self._listeners):
            listener(hidden)


# ── State machine ────────────────────────────────────────────────────────


class RestTimer:
    """
    Idle <-> Running countdown.

    start(seconds) clamps to >= 1 and (re)starts; each tick decrements by one and
    completes at 0; skip() returns to Idle; adjust(delta) changes the remaining
    time while running but never below 1 second. Completion fires on_complete
    with the vibration pattern exactly once per run.
    """

    def __init__(
        self,
        clock: Clock,
        scheduler: Scheduler,
        visibility: VisibilitySignal | None = None,
        on_complete: CompletionCallback | None = None,
        vibration_pattern: tuple[int, ...] = VIBRATION_PATTERN,
    ):
        self._clock = clock
        self._scheduler = scheduler
        self._on_complete = on_complete
        self._vibration_pattern = vibration_pattern
        self._state: RestTimerState = IDLE_STATE
        self._ticker: Cancellable | None = None
        self._hidden_at: float | None = None
        self._subscription = visibility.subscribe(self.handle_visibility) if visibility else None

    @property
    def state(self) -> RestTimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    def start(self, seconds: int) -> RestTimerState:
        clamped = max(REST_TIMER_MIN_SECONDS, int(seconds))
        self._state = RestTimerState(is_running=True, seconds_remaining=clamped, total_seconds=clamped)
        if self._hidden_at is None:
            self._restart_ticker()
        else:
            # Started while hidden: count the hidden stretch from now, tick on show
            self._cancel_ticker()
            self._hidden_at = self._clock.now()
        logger.debug("Rest timer started for %ds", clamped)
        return self._state

    def skip(self) -> RestTimerState:
        self._cancel_ticker()
        if self.is_running:
            logger.debug("Rest timer skipped with %ds left", self._state.seconds_remaining)
        self._state = IDLE_STATE
        return self._state

    def adjust(self, delta_seconds: int) -> RestTimerState:
        if not self.is_running:
            return self._state
        remaining = max(REST_TIMER_MIN_SECONDS, self._state.seconds_remaining + int(delta_seconds))
        total = max(self._state.total_seconds, remaining)
        self._state = RestTimerState(is_running=True, seconds_remaining=remaining, total_seconds=total)
        return self._state

    def tick(self) -> None:
        """One scheduled second elapsed."""
        if not self.is_running:
            self._cancel_ticker()
            return
        remaining = self._state.seconds_remaining - 1
        if remaining <= 0:
            self._complete()
            return
        self._state = self._state.model_copy(update={"seconds_remaining": remaining})

    def handle_visibility(self, hidden: bool) -> None:
        if hidden:
            self.on_hidden()
        else:
            self.on_shown()

    def on_hidden(self) -> None:
        if self._hidden_at is not None:
            return
        self._hidden_at = self._clock.now()
        self._cancel_ticker()

    def on_shown(self) -> None:
        if self._hidden_at is None:
            return
        elapsed = max(0, math.floor(self._clock.now() - self._hidden_at + 0.5))
        self._hidden_at = None
        if not self.is_running:
            return
        remaining = self._state.seconds_remaining - elapsed
        logger.debug("Rest timer resumed after %ds hidden", elapsed)
        if remaining <= 0:
            self._complete()
            return
        self._state = self._state.model_copy(update={"seconds_remaining": remaining})
        self._restart_ticker()

    def close(self) -> None:
        """Teardown: stop the tick and stop listening for visibility changes."""
        self._cancel_ticker()
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _complete(self) -> None:
        self._cancel_ticker()
        self._state = IDLE_STATE
        logger.debug("Rest timer finished")
        if self._on_complete is not None:
            self._on_complete(self._vibration_pattern)

    def _restart_ticker(self) -> None:
        self._cancel_ticker()
        self._ticker = self._scheduler.every(REST_TIMER_TICK_SECONDS, self.tick)

    def _cancel_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
