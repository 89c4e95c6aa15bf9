"""
Health check routes.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from ..core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "port": settings.PORT,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
