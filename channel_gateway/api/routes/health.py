"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if no session is registered (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness counts registry entries only; it does not call the bridge
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from channel_gateway import __version__
from channel_gateway.api.dependencies import get_session_registry
from channel_gateway.core.handle_protocols import SessionRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "channel-gateway",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Readiness probe — at least one session must be registered."""
    sessions = len(registry)
    if not sessions:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "no_sessions"},
        )
    return {"status": "ready", "checks": {"sessions": sessions}}
