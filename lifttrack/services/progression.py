"""Training-max progression from an AMRAP set.

The engine only computes the delta. Applying it to a stored training max (and
rounding to the nearest plate increment) belongs to the storage layer.

Default bracket table:

    reps   upper  lower
    0-1    0      0
    2-3    2.5    2.5
    4-5    2.5    5
    6+     5      7.5
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from lifttrack.core.constants import LOWER_BODY_EXERCISES, UPPER_BODY_EXERCISES
from lifttrack.core.enums import ExerciseClass
from lifttrack.schemas.progression import (
    CustomProgressionRule,
    ProgressionResult,
    ProgressionRule,
    ProgressionRuleTable,
)

logger = logging.getLogger(__name__)

DEFAULT_PROGRESSION_TABLE = ProgressionRuleTable(
    rules=(
        ProgressionRule(min_reps=0, max_reps=1, increase_upper=0.0, increase_lower=0.0),
        ProgressionRule(min_reps=2, max_reps=3, increase_upper=2.5, increase_lower=2.5),
        ProgressionRule(min_reps=4, max_reps=5, increase_upper=2.5, increase_lower=5.0),
        ProgressionRule(min_reps=6, max_reps=None, increase_upper=5.0, increase_lower=7.5),
    )
)


def classify_exercise(exercise_key: str) -> ExerciseClass | None:
    """Map a catalog key (bench/ohp/squat/deadlift) to its class. None if unknown."""
    key = (exercise_key or "").strip().lower()
    if key in UPPER_BODY_EXERCISES:
        return ExerciseClass.UPPER_BODY
    if key in LOWER_BODY_EXERCISES:
        return ExerciseClass.LOWER_BODY
    return None


def calculate_progression(
    amrap_reps: int,
    exercise_class: ExerciseClass,
    table: ProgressionRuleTable = DEFAULT_PROGRESSION_TABLE,
) -> ProgressionResult:
    """
    Look up the training-max increase for an AMRAP rep count.
    Negative reps are treated as 0. Rules are scanned in ascending min_reps;
    the first inclusive match wins.
    """
    reps = max(0, int(amrap_reps))
    for rule in sorted(table.rules, key=lambda r: r.min_reps):
        if rule.matches(reps):
            return ProgressionResult(increase=rule.increase_for(exercise_class))
    # Table not starting at 0 or with a gap; validated tables never get here
    logger.warning("No progression bracket for %d reps; no increase applied", reps)
    return ProgressionResult(increase=0.0)


def calculate_custom_progression(
    amrap_reps: int,
    rules: Sequence[CustomProgressionRule],
) -> ProgressionResult:
    """
    Same bracket lookup over an operator-defined rule list.

    Assumes a validated, gap-free table. If a rep count still lands in a gap,
    the rule with the highest max_reps below the rep count is used; with no
    rule below it the increase is 0.
    """
    reps = max(0, int(amrap_reps))
    ordered = sorted(rules, key=lambda r: (r.min_reps, r.max_reps))
    for rule in ordered:
        if rule.min_reps <= reps <= rule.max_reps:
            return ProgressionResult(increase=rule.increase)

    below = [r for r in ordered if r.max_reps < reps]
    if not below:
        logger.warning("No progression rule covers %d reps and none below it", reps)
        return ProgressionResult(increase=0.0)
    fallback = max(below, key=lambda r: r.max_reps)
    logger.warning(
        "No progression rule covers %d reps; falling back to %d-%d bracket",
        reps,
        fallback.min_reps,
        fallback.max_reps,
    )
    return ProgressionResult(increase=fallback.increase)


def rules_for_exercise(
    rules: Iterable[CustomProgressionRule],
    exercise_ref: str | None = None,
    category: str | None = None,
) -> list[CustomProgressionRule]:
    """Pick the rules that apply to one exercise.
    Exercise-specific rules beat category rules, which beat unscoped rules."""
    rules = list(rules)
    if exercise_ref is not None:
        specific = [r for r in rules if r.exercise_ref == exercise_ref]
        if specific:
            return specific
    if category is not None:
        by_category = [r for r in rules if r.exercise_ref is None and r.category == category]
        if by_category:
            return by_category
    return [r for r in rules if r.exercise_ref is None and r.category is None]
