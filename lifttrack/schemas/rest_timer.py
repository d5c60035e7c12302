"""Rest timer state snapshot and stored preferences."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lifttrack.core.constants import (
    REST_TIMER_SETTING_DEFAULT_SECONDS,
    REST_TIMER_SETTING_MAX_SECONDS,
    REST_TIMER_SETTING_MIN_SECONDS,
)


class RestTimerState(BaseModel):
    """What the session UI renders. Idle means all zeros."""

    model_config = ConfigDict(frozen=True)

    is_running: bool = False
    seconds_remaining: int = Field(0, ge=0)
    total_seconds: int = Field(0, ge=0)


IDLE_STATE = RestTimerState()


class RestTimerSettings(BaseModel):
    """User preference: whether to auto-start the timer and for how long."""

    enabled: bool = True
    duration_seconds: int = Field(
        REST_TIMER_SETTING_DEFAULT_SECONDS,
        ge=REST_TIMER_SETTING_MIN_SECONDS,
        le=REST_TIMER_SETTING_MAX_SECONDS,
    )

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None) -> "RestTimerSettings":
        """
        Build settings from an untrusted stored mapping.
        Each field falls back to its default when missing, mistyped or out of range.
        """
        if not raw:
            return cls()
        enabled = raw.get("enabled")
        duration = raw.get("duration_seconds")
        values: dict[str, Any] = {}
        if isinstance(enabled, bool):
            values["enabled"] = enabled
        # bool is an int subclass; a stored True is not a duration
        if (
            isinstance(duration, (int, float))
            and not isinstance(duration, bool)
            and REST_TIMER_SETTING_MIN_SECONDS <= duration <= REST_TIMER_SETTING_MAX_SECONDS
        ):
            values["duration_seconds"] = int(duration)
        return cls(**values)
