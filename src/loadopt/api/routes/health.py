"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...services.loading.constants import STRATEGIES

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Liveness check. The optimizer has no external dependencies to probe."""
    return {"status": "ok", "strategies": list(STRATEGIES)}
