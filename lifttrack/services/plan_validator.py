"""Plan completeness: per-day status badges and full save-time validation.

validate_plan collects every violation in one pass so the editor can show them
all at once. It never raises and never mutates the plan.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence

from lifttrack.core.constants import (
    MAX_DAYS_PER_WEEK,
    MIN_DAYS_PER_WEEK,
    UNKNOWN_EXERCISE_NAME,
)
from lifttrack.core.enums import DayStatus
from lifttrack.schemas.plan import ExerciseSlot, Plan, PlanDay, ValidationResult
from lifttrack.schemas.progression import CustomProgressionRule

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(text: str) -> str:
    """'5/3/1 Boring But Big' -> '5-3-1-boring-but-big'."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    return slug.strip("-")


def day_status(day: PlanDay) -> DayStatus:
    """Empty: no exercises. Incomplete: some exercise without sets. Complete otherwise."""
    if not day.slots:
        return DayStatus.EMPTY
    if any(not slot.sets for slot in day.slots):
        return DayStatus.INCOMPLETE
    return DayStatus.COMPLETE


def _slot_label(slot: ExerciseSlot, catalog: Mapping[str, str]) -> str:
    return slot.display_name or catalog.get(slot.exercise_ref) or UNKNOWN_EXERCISE_NAME


def _rule_label(rule: CustomProgressionRule) -> str:
    return f"{rule.min_reps}-{rule.max_reps} reps"


def validate_progression_rules(rules: Sequence[CustomProgressionRule]) -> list[str]:
    """
    Check an operator rule table: each rule must have min_reps <= max_reps and a
    non-negative increase, and each bracket must start exactly one rep above the
    bracket below it (no gap, no overlap), with the lowest bracket starting at 0
    reps. Scoped rules (per exercise or category) are checked as separate tables.
    """
    errors: list[str] = []
    groups: dict[tuple[str | None, str | None], list[CustomProgressionRule]] = {}
    for rule in rules:
        groups.setdefault((rule.exercise_ref, rule.category), []).append(rule)

    for (exercise_ref, category), group in groups.items():
        scope = ""
        if exercise_ref is not None:
            scope = f" for exercise {exercise_ref}"
        elif category is not None:
            scope = f" for category {category}"

        ordered = sorted(group, key=lambda r: (r.min_reps, r.max_reps))
        if ordered[0].min_reps > 0:
            errors.append(
                f"Progression rules{scope} do not cover 0-{ordered[0].min_reps - 1} reps"
            )
        for rule in ordered:
            if rule.min_reps > rule.max_reps:
                errors.append(
                    f"Progression rule {_rule_label(rule)}{scope}: "
                    "min reps must be less than or equal to max reps"
                )
            if rule.increase < 0:
                errors.append(f"Progression rule {_rule_label(rule)}{scope}: increase cannot be negative")

        for below, rule in zip(ordered, ordered[1:]):
            if rule.min_reps > below.max_reps + 1:
                errors.append(
                    f"Progression rules{scope} have a gap between {_rule_label(below)} "
                    f"and {_rule_label(rule)}"
                )
            elif rule.min_reps <= below.max_reps:
                errors.append(
                    f"Progression rules{scope} overlap: {_rule_label(below)} and {_rule_label(rule)}"
                )
    return errors


def validate_plan(
    plan: Plan,
    existing_slugs: Iterable[str] = (),
    catalog: Mapping[str, str] | None = None,
) -> ValidationResult:
    """
    Full validation before save.
    existing_slugs: slugs already taken by other plans.
    catalog: exercise_ref -> exercise name, used in messages only.
    """
    catalog = catalog or {}
    errors: list[str] = []

    # Metadata
    if not plan.name.strip():
        errors.append("Plan name is required")
    slug = plan.slug.strip()
    if not slug:
        errors.append("Plan slug is required")
    elif not SLUG_PATTERN.match(slug):
        errors.append(
            f"Plan slug '{slug}' is invalid: use lowercase letters, digits and single hyphens"
        )
    elif slug in set(existing_slugs):
        errors.append(f"Plan slug '{slug}' is already in use")

    if not MIN_DAYS_PER_WEEK <= plan.days_per_week <= MAX_DAYS_PER_WEEK:
        errors.append(
            f"Days per week must be between {MIN_DAYS_PER_WEEK} and {MAX_DAYS_PER_WEEK}"
        )
    elif len(plan.days) != plan.days_per_week:
        errors.append(
            f"Plan has {len(plan.days)} days but days per week is {plan.days_per_week}"
        )

    # Days and exercises
    for day in plan.days:
        if not day.slots:
            errors.append(f"Day {day.day_number}: no exercises added")
            continue
        for slot in day.slots:
            if not slot.sets:
                errors.append(f"Day {day.day_number}: {_slot_label(slot, catalog)} has no sets defined")

    errors.extend(validate_progression_rules(plan.progression_rules))

    if errors:
        logger.info("Plan '%s' failed validation with %d error(s)", plan.name, len(errors))
    return ValidationResult(errors=errors)
