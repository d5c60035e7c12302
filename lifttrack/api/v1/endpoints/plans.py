"""Plan draft checks for the admin editor: validation, day badges, slug suggestion."""

from fastapi import APIRouter

from lifttrack.schemas.plan import (
    DayStatusRead,
    PlanDay,
    PlanValidateRequest,
    PlanValidateResponse,
    SlugSuggestion,
)
from lifttrack.services.plan_validator import day_status, generate_slug, validate_plan

router = APIRouter()


@router.post("/validate", response_model=PlanValidateResponse)
async def validate(payload: PlanValidateRequest):
    """All validation errors at once plus a status badge per day. Saving must be blocked while errors is non-empty."""
    result = validate_plan(payload.plan, payload.existing_slugs, payload.catalog)
    return PlanValidateResponse(
        errors=result.errors,
        is_valid=result.is_valid,
        day_statuses=[
            DayStatusRead(day_number=d.day_number, status=day_status(d)) for d in payload.plan.days
        ],
    )


@router.post("/day-status", response_model=DayStatusRead)
async def get_day_status(day: PlanDay):
    return DayStatusRead(day_number=day.day_number, status=day_status(day))


@router.get("/slug", response_model=SlugSuggestion)
async def suggest_slug(name: str):
    return SlugSuggestion(name=name, slug=generate_slug(name))
