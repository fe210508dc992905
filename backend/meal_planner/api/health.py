"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from meal_planner.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/config")
async def config_health():
    """Which optional integrations are configured.

    Generation needs an OpenAI key; plan persistence is optional and the
    frontend hides save/load when it is off.
    """
    settings = get_settings()
    return {
        "status": "healthy" if settings.openai_configured else "degraded",
        "openai_configured": settings.openai_configured,
        "openai_model": settings.openai_model,
        "persistence_enabled": settings.persistence_enabled,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
