"""
Health check endpoint
"""
from fastapi import APIRouter

from backend.app.core.config import settings

router = APIRouter()


@router.get("")
async def health_check() -> dict:
    """Liveness check"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
    }
