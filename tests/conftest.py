"""Shared fixtures: fake timer host and sample plans."""

from collections.abc import Callable

import pytest

from lifttrack.schemas.plan import Plan, PlanDay
from lifttrack.services.rest_timer import RestTimer, VisibilityBroadcaster

from tests.factories import make_slot

class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds

class _Handle:
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

class ManualScheduler:
    """Records recurring callbacks; tests fire them with tick()."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.handles: list[_Handle] = []

    def every(self, interval, callback):
        handle = _Handle(callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self) -> list[_Handle]:
        return [h for h in self.handles if not h.cancelled]

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            self.clock.advance(1)
            for handle in list(self.active):
                if not handle.cancelled:
                    handle.callback()

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)

@pytest.fixture
def visibility():
    return VisibilityBroadcaster()

@pytest.fixture
def completions():
    return []

@pytest.fixture
def timer(clock, scheduler, visibility, completions):
    t = RestTimer(clock, scheduler, visibility, on_complete=completions.append)
    yield t
    t.close()

@pytest.fixture
def catalog():
    return {"bench": "Bench Press", "squat": "Squat", "ohp": "Overhead Press", "deadlift": "Deadlift"}

@pytest.fixture
def complete_plan():
    return Plan(
        name="nSuns 4 Day",
        slug="nsuns-4-day",
        days_per_week=3,
        days=[
            PlanDay(day_number=1, name="Bench", slots=[make_slot("bench", 9), make_slot("ohp", 8)]),
            PlanDay(day_number=2, name="Squat", slots=[make_slot("squat", 9), make_slot("deadlift", 8)]),
            PlanDay(day_number=3, name="Deadlift", slots=[make_slot("deadlift", 9)]),
        ],
    )
