"""Workout plan draft schemas (Plan -> Day -> ExerciseSlot -> Set)."""

from uuid import uuid4

from pydantic import BaseModel, Field

from lifttrack.core.constants import DEFAULT_DAYS_PER_WEEK
from lifttrack.core.enums import DayStatus
from lifttrack.schemas.progression import CustomProgressionRule


class PlanSet(BaseModel):
    percentage_of_training_max: float = Field(ge=0)  # 0-100+, percent of TM
    target_reps: int = Field(ge=1)
    is_amrap: bool = False
    is_progression: bool = False  # this set's reps drive the TM update


class ExerciseSlot(BaseModel):
    """One exercise within a day. exercise_ref is a key into the external catalog."""

    slot_id: str = Field(default_factory=lambda: uuid4().hex)
    exercise_ref: str
    order_index: int = 1
    display_name: str | None = None
    sets: list[PlanSet] = []


class PlanDay(BaseModel):
    day_number: int
    name: str | None = None
    slots: list[ExerciseSlot] = []


class Plan(BaseModel):
    """Editor draft. Constraints live in the validator so drafts can be incomplete."""

    name: str = ""
    slug: str = ""
    description: str | None = None
    days_per_week: int = DEFAULT_DAYS_PER_WEEK
    is_public: bool = True
    days: list[PlanDay] = []
    progression_rules: list[CustomProgressionRule] = []


class ValidationResult(BaseModel):
    errors: list[str] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---- API payloads ----


class PlanValidateRequest(BaseModel):
    plan: Plan
    existing_slugs: list[str] = []
    catalog: dict[str, str] = {}  # exercise_ref -> display name


class DayStatusRead(BaseModel):
    day_number: int
    status: DayStatus


class PlanValidateResponse(BaseModel):
    errors: list[str]
    is_valid: bool
    day_statuses: list[DayStatusRead] = []


class SlugSuggestion(BaseModel):
    name: str
    slug: str
