"""Progression rule and result schemas."""

from pydantic import BaseModel, ConfigDict, Field

from lifttrack.core.enums import ExerciseClass


class ProgressionRule(BaseModel):
    """One bracket of the fixed table; max_reps None = open-ended top bracket."""

    model_config = ConfigDict(frozen=True)

    min_reps: int = Field(ge=0)
    max_reps: int | None = Field(None, ge=0)
    increase_upper: float = Field(ge=0)
    increase_lower: float = Field(ge=0)

    def matches(self, reps: int) -> bool:
        if reps < self.min_reps:
            return False
        return self.max_reps is None or reps <= self.max_reps

    def increase_for(self, exercise_class: ExerciseClass) -> float:
        if exercise_class == ExerciseClass.UPPER_BODY:
            return self.increase_upper
        return self.increase_lower


class ProgressionRuleTable(BaseModel):
    """Immutable ordered bracket table passed explicitly into the engine."""

    model_config = ConfigDict(frozen=True)

    rules: tuple[ProgressionRule, ...]


class CustomProgressionRule(BaseModel):
    """Operator-defined rule for a single plan.

    Optionally scoped to one exercise (exercise_ref) or an exercise category.
    Not range-checked here: a draft may hold min_reps > max_reps and the plan
    validator reports it.
    """

    min_reps: int = Field(ge=0)
    max_reps: int = Field(ge=0)
    increase: float
    exercise_ref: str | None = None
    category: str | None = None


class ProgressionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    increase: float


class ProgressionRequest(BaseModel):
    """Either exercise_class or exercise_key (bench/ohp/squat/deadlift) is required
    unless custom rules are given."""

    amrap_reps: int
    exercise_class: ExerciseClass | None = None
    exercise_key: str | None = None
    category: str | None = None  # narrows custom rules scoped by category
    rules: list[CustomProgressionRule] | None = None
