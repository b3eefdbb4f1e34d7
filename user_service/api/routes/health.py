"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /healthcheck always returns 200 "OK" (plain text) if the process is up
    - GET /api/v1/health/ready returns 503 if the active store is unreachable
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from user_service.api.deps import get_user_storage
from user_service.infrastructure.storage_factory import UserStorage

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthcheck", response_class=PlainTextResponse)
async def health_check():
    """Liveness probe."""
    return "OK"


@router.get("/api/v1/health/ready")
async def readiness_check(storage: UserStorage = Depends(get_user_storage)):
    """Readiness probe — includes backing store connectivity."""
    store_ok = await storage.health_check()
    if not store_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
                "backend": storage.backend.value,
            },
        )
    return {
        "status": "ready",
        "backend": storage.backend.value,
        "cached": storage.cached,
    }
