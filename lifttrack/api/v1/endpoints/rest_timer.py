"""Rest timer preferences offered to session clients."""

from fastapi import APIRouter

from lifttrack.core.config import get_settings
from lifttrack.schemas.rest_timer import RestTimerSettings

router = APIRouter()


@router.get("/settings/defaults", response_model=RestTimerSettings)
async def default_settings():
    """Default preference; an out-of-range configured duration falls back to the built-in default."""
    settings = get_settings()
    return RestTimerSettings.from_raw({"enabled": True, "duration_seconds": settings.rest_timer_default_seconds})


@router.post("/settings/normalize", response_model=RestTimerSettings)
async def normalize_settings(raw: dict):
    """Sanitize a client's stored preference; bad fields revert to defaults."""
    return RestTimerSettings.from_raw(raw)
