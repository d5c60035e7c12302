"""Rest timer state machine driven by a fake clock and manual scheduler."""

import asyncio

from lifttrack.core.constants import VIBRATION_PATTERN
from lifttrack.schemas.rest_timer import RestTimerSettings, RestTimerState
from lifttrack.services.rest_timer import AsyncioScheduler, RestTimer

IDLE = RestTimerState(is_running=False, seconds_remaining=0, total_seconds=0)


def test_new_timer_is_idle(timer, scheduler):
    assert timer.state == IDLE
    assert scheduler.active == []


def test_start_and_tick_down(timer, scheduler):
    timer.start(180)
    assert timer.state == RestTimerState(is_running=True, seconds_remaining=180, total_seconds=180)
    scheduler.tick(60)
    assert timer.state.seconds_remaining == 120
    assert timer.state.total_seconds == 180


def test_start_clamps_to_one_second(timer):
    assert timer.start(0).seconds_remaining == 1
    assert timer.start(-20).total_seconds == 1


def test_natural_expiry_fires_completion_once(timer, scheduler, completions):
    timer.start(3)
    scheduler.tick(3)
    assert timer.state == IDLE
    assert completions == [VIBRATION_PATTERN]
    assert scheduler.active == []
    scheduler.tick(5)
    assert completions == [VIBRATION_PATTERN]


def test_skip_returns_to_idle_and_is_idempotent(timer, scheduler, completions):
    timer.start(90)
    scheduler.tick(10)
    assert timer.skip() == IDLE
    assert scheduler.active == []
    assert timer.skip() == IDLE
    assert completions == []


def test_restart_never_leaves_two_tickers(timer, scheduler):
    timer.start(60)
    timer.start(30)
    assert len(scheduler.active) == 1
    scheduler.tick()
    assert timer.state.seconds_remaining == 29


def test_adjust_raises_total_and_floors_at_one(timer, scheduler):
    timer.start(60)
    assert timer.adjust(30) == RestTimerState(is_running=True, seconds_remaining=90, total_seconds=90)
    scheduler.tick(80)
    assert timer.state.seconds_remaining == 10
    state = timer.adjust(-50)
    assert state.seconds_remaining == 1
    assert state.total_seconds == 90
    assert state.is_running


def test_adjust_down_keeps_total(timer):
    timer.start(120)
    assert timer.adjust(-30) == RestTimerState(is_running=True, seconds_remaining=90, total_seconds=120)


def test_adjust_while_idle_is_noop(timer):
    assert timer.adjust(30) == IDLE


def test_hidden_past_expiry_completes_once(timer, clock, visibility, scheduler, completions):
    timer.start(60)
    visibility.hide()
    assert scheduler.active == []
    clock.advance(70)
    visibility.show()
    assert timer.state == IDLE
    assert completions == [VIBRATION_PATTERN]
    assert scheduler.active == []


def test_hidden_short_stretch_applies_single_correction(timer, clock, visibility, scheduler):
    timer.start(60)
    scheduler.tick(5)
    visibility.hide()
    clock.advance(20.4)
    visibility.show()
    assert timer.state.seconds_remaining == 35
    assert timer.state.total_seconds == 60
    # ticker reinstalled exactly once
    assert len(scheduler.active) == 1
    scheduler.tick()
    assert timer.state.seconds_remaining == 34


def test_elapsed_rounds_to_nearest_second(timer, clock, visibility):
    timer.start(60)
    visibility.hide()
    clock.advance(9.6)
    visibility.show()
    assert timer.state.seconds_remaining == 50


def test_show_without_hide_is_noop(timer, scheduler):
    timer.start(60)
    timer.on_shown()
    assert timer.state.seconds_remaining == 60
    assert len(scheduler.active) == 1


def test_duplicate_hide_keeps_first_timestamp(timer, clock):
    timer.start(60)
    timer.on_hidden()
    clock.advance(10)
    timer.on_hidden()
    clock.advance(10)
    timer.on_shown()
    assert timer.state.seconds_remaining == 40


def test_hide_while_idle_then_show_stays_idle(timer, clock, visibility, completions):
    visibility.hide()
    clock.advance(30)
    visibility.show()
    assert timer.state == IDLE
    assert completions == []


def test_start_while_hidden_counts_from_start(timer, clock, visibility, scheduler):
    visibility.hide()
    clock.advance(100)
    timer.start(60)
    assert scheduler.active == []
    clock.advance(15)
    visibility.show()
    assert timer.state.seconds_remaining == 45
    assert len(scheduler.active) == 1


def test_close_cancels_ticker_and_unsubscribes(clock, scheduler, visibility):
    timer = RestTimer(clock, scheduler, visibility)
    timer.start(60)
    timer.close()
    assert scheduler.active == []
    visibility.hide()
    clock.advance(100)
    visibility.show()
    assert timer.state.seconds_remaining == 60


def test_timer_without_completion_callback(clock, scheduler):
    timer = RestTimer(clock, scheduler)
    timer.start(1)
    scheduler.tick()
    assert timer.state == IDLE


def test_asyncio_scheduler_repeats_until_cancelled():
    calls = []

    async def run():
        handle = AsyncioScheduler().every(0.01, lambda: calls.append(1))
        await asyncio.sleep(0.055)
        handle.cancel()
        seen = len(calls)
        await asyncio.sleep(0.03)
        return seen

    seen = asyncio.run(run())
    assert seen >= 2
    assert len(calls) == seen


# ---- Stored preferences ----


def test_settings_defaults():
    s = RestTimerSettings.from_raw(None)
    assert s.enabled is True
    assert s.duration_seconds == 180


def test_settings_keep_valid_values():
    s = RestTimerSettings.from_raw({"enabled": False, "duration_seconds": 90})
    assert s == RestTimerSettings(enabled=False, duration_seconds=90)


def test_settings_fall_back_per_field():
    s = RestTimerSettings.from_raw({"enabled": "yes", "duration_seconds": 900})
    assert s == RestTimerSettings()
    s = RestTimerSettings.from_raw({"enabled": False, "duration_seconds": True})
    assert s == RestTimerSettings(enabled=False, duration_seconds=180)


def test_is_running_follows_state(timer, scheduler):
    assert not timer.is_running
    timer.start(2)
    assert timer.is_running
    scheduler.tick(2)
    assert not timer.is_running
