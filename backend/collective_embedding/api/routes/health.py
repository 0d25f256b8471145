"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/health always returns 200 if the process is up
"""

from fastapi import APIRouter, Depends, status

from collective_embedding.api.dependencies import get_engine
from collective_embedding.core.session_engine import SessionEngine

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(engine: SessionEngine = Depends(get_engine)):
    """Basic liveness probe."""
    return {
        "status": "healthy",
        "service": "collective-embedding",
        "version": "1.0.0",
        "session_phase": engine.phase.value,
    }
