"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 200 with the stored user count once the
      repository answers a read (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_user_repository
from app.config import get_settings
from app.core.repository_protocols import UserRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.version,
    }


@router.get("/ready")
async def readiness_check(
    repository: UserRepository = Depends(get_user_repository),
):
    """Readiness probe — the repository lock is acquirable and answers."""
    users = await repository.count()
    return {"status": "ready", "checks": {"repository": "healthy", "users": users}}
