"""API v1 router aggregation."""

from fastapi import APIRouter

from lifttrack.api.v1.endpoints import health, plans, progression, rest_timer

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(progression.router, prefix="/progression", tags=["progression"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(rest_timer.router, prefix="/rest-timer", tags=["rest-timer"])
