"""Training-max progression from an AMRAP result (pure logic, no storage)."""

from fastapi import APIRouter, HTTPException

from lifttrack.schemas.progression import ProgressionRequest, ProgressionResult
from lifttrack.services.progression import (
    calculate_custom_progression,
    calculate_progression,
    classify_exercise,
    rules_for_exercise,
)

router = APIRouter()


@router.post("/calculate", response_model=ProgressionResult)
async def calculate(payload: ProgressionRequest):
    """
    Increase to add to the training max for the given AMRAP reps.
    Uses the plan's custom rules when given (narrowed to the exercise's own or
    category rules when those exist), otherwise the default bracket table.
    """
    if payload.rules:
        rules = rules_for_exercise(payload.rules, payload.exercise_key, payload.category)
        return calculate_custom_progression(payload.amrap_reps, rules)

    exercise_class = payload.exercise_class
    if exercise_class is None and payload.exercise_key:
        exercise_class = classify_exercise(payload.exercise_key)
        if exercise_class is None:
            raise HTTPException(status_code=400, detail=f"Unknown exercise '{payload.exercise_key}'")
    if exercise_class is None:
        raise HTTPException(status_code=400, detail="exercise_class or exercise_key is required")
    return calculate_progression(payload.amrap_reps, exercise_class)
