"""Shared enums for schemas, services and API."""

from enum import Enum


class ExerciseClass(str, Enum):
    """Which progression bracket column applies to a lift."""

    UPPER_BODY = "upper_body"  # bench, overhead press
    LOWER_BODY = "lower_body"  # squat, deadlift


class DayStatus(str, Enum):
    """Completeness badge for a training day."""

    EMPTY = "empty"  # no exercises
    INCOMPLETE = "incomplete"  # some exercise has no sets
    COMPLETE = "complete"


class DeletionPhase(str, Enum):
    """Two-phase exercise slot deletion."""

    IDLE = "idle"
    PENDING_CONFIRMATION = "pending_confirmation"
