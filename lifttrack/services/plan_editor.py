"""Plan editor helpers: set scheme editing, slot ordering and two-phase delete.

These are the only operations that mutate a draft plan in place.
"""

from __future__ import annotations

import logging

from lifttrack.core.constants import (
    DEFAULT_SET_PERCENTAGE,
    DEFAULT_SET_REPS,
    MAX_DAYS_PER_WEEK,
    MIN_DAYS_PER_WEEK,
)
from lifttrack.core.enums import DeletionPhase
from lifttrack.schemas.plan import ExerciseSlot, Plan, PlanDay, PlanSet

logger = logging.getLogger(__name__)


# ---- Sets ----


def add_set(slot: ExerciseSlot) -> PlanSet:
    """Append a set copying % and reps from the previous one (AMRAP/progression flags are not copied)."""
    if slot.sets:
        last = slot.sets[-1]
        new_set = PlanSet(
            percentage_of_training_max=last.percentage_of_training_max,
            target_reps=last.target_reps,
        )
    else:
        new_set = PlanSet(
            percentage_of_training_max=DEFAULT_SET_PERCENTAGE,
            target_reps=DEFAULT_SET_REPS,
        )
    slot.sets.append(new_set)
    return new_set


def bulk_add_sets(
    slot: ExerciseSlot,
    count: int,
    percentage: float = DEFAULT_SET_PERCENTAGE,
    reps: int = DEFAULT_SET_REPS,
) -> list[PlanSet]:
    """Append `count` identical straight sets."""
    new_sets = [
        PlanSet(percentage_of_training_max=percentage, target_reps=reps) for _ in range(max(0, count))
    ]
    slot.sets.extend(new_sets)
    return new_sets


def remove_set(slot: ExerciseSlot, index: int) -> PlanSet | None:
    if not 0 <= index < len(slot.sets):
        return None
    return slot.sets.pop(index)


def copy_sets(source: ExerciseSlot, target: ExerciseSlot) -> None:
    """Replace target's sets with an independent copy of source's sets."""
    target.sets = [s.model_copy(deep=True) for s in source.sets]


# ---- Slots ----


def _renumber(day: PlanDay) -> None:
    for i, slot in enumerate(day.slots, start=1):
        slot.order_index = i


def _slot_index(day: PlanDay, slot_id: str) -> int:
    for i, slot in enumerate(day.slots):
        if slot.slot_id == slot_id:
            return i
    return -1


def find_slot(day: PlanDay, slot_id: str) -> ExerciseSlot | None:
    idx = _slot_index(day, slot_id)
    return day.slots[idx] if idx >= 0 else None


def add_slot(day: PlanDay, exercise_ref: str, display_name: str | None = None) -> ExerciseSlot:
    """Append an exercise with no sets yet."""
    slot = ExerciseSlot(
        exercise_ref=exercise_ref,
        order_index=len(day.slots) + 1,
        display_name=display_name,
    )
    day.slots.append(slot)
    return slot


def move_slot_up(day: PlanDay, slot_id: str) -> bool:
    """Swap with the previous slot. False (no change) at the top or for an unknown id."""
    idx = _slot_index(day, slot_id)
    if idx <= 0:
        return False
    day.slots[idx - 1], day.slots[idx] = day.slots[idx], day.slots[idx - 1]
    _renumber(day)
    return True


def move_slot_down(day: PlanDay, slot_id: str) -> bool:
    """Swap with the next slot. False (no change) at the bottom or for an unknown id."""
    idx = _slot_index(day, slot_id)
    if idx < 0 or idx >= len(day.slots) - 1:
        return False
    day.slots[idx], day.slots[idx + 1] = day.slots[idx + 1], day.slots[idx]
    _renumber(day)
    return True


def remove_slot(day: PlanDay, slot_id: str) -> ExerciseSlot | None:
    idx = _slot_index(day, slot_id)
    if idx < 0:
        return None
    removed = day.slots.pop(idx)
    _renumber(day)
    return removed


# ---- Days ----


def resize_days(plan: Plan, days_per_week: int) -> None:
    """Clamp to 1-7, then append empty 'Day N' days or drop trailing days."""
    target = max(MIN_DAYS_PER_WEEK, min(MAX_DAYS_PER_WEEK, int(days_per_week)))
    plan.days_per_week = target
    if target < len(plan.days):
        del plan.days[target:]
        return
    for n in range(len(plan.days) + 1, target + 1):
        plan.days.append(PlanDay(day_number=n, name=f"Day {n}"))


# ---- Two-phase delete ----


class SlotDeletion:
    """
    Idle -> PendingConfirmation(slot_id) -> Idle.

    A slot without sets is removed on request. A slot with sets waits for
    confirm() (removes it) or cancel() (keeps it).
    """

    def __init__(self) -> None:
        self.phase = DeletionPhase.IDLE
        self.pending_slot_id: str | None = None
        self.pending_set_count = 0

    @property
    def is_pending(self) -> bool:
        return self.phase == DeletionPhase.PENDING_CONFIRMATION

    def request_delete(self, day: PlanDay, slot_id: str) -> ExerciseSlot | None:
        """Returns the removed slot when deletion happened immediately, else None."""
        slot = find_slot(day, slot_id)
        if slot is None:
            return None
        if not slot.sets:
            self._reset()
            return remove_slot(day, slot_id)
        self.phase = DeletionPhase.PENDING_CONFIRMATION
        self.pending_slot_id = slot_id
        self.pending_set_count = len(slot.sets)
        logger.debug("Deleting slot %s needs confirmation (%d sets)", slot_id, len(slot.sets))
        return None

    def confirm(self, day: PlanDay) -> ExerciseSlot | None:
        if not self.is_pending:
            return None
        slot_id = self.pending_slot_id
        self._reset()
        return remove_slot(day, slot_id)

    def cancel(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.phase = DeletionPhase.IDLE
        self.pending_slot_id = None
        self.pending_set_count = 0
