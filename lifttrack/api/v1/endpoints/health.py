"""Health check endpoint for load balancers and monitoring."""

import os

from fastapi import APIRouter

from lifttrack import __version__

router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok", "version": __version__}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload
