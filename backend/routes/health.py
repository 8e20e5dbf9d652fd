"""Health, readiness and cache administration routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Header, Request

from errors import MissingAPIKeyError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready(request: Request) -> dict:
    """Lightweight readiness check — no external calls."""
    settings = request.app.state.settings
    return {"status": "ok", "service": "oddsengine-proxy", "commit": settings.git_sha}


@router.get("/health")
async def health(request: Request) -> dict:
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "cache_size": request.app.state.cache.size(),
        "port": settings.port,
        "api_key_configured": settings.api_key_configured,
    }


@router.post("/cache/clear")
async def clear_cache(request: Request, x_api_key: str | None = Header(None)) -> dict:
    """Flush every cached upstream response.

    Open to any caller unless CACHE_CLEAR_REQUIRES_KEY is set, in which case
    the caller must present the configured upstream key.
    """
    settings = request.app.state.settings
    if settings.cache_clear_requires_key:
        if not settings.api_key or x_api_key != settings.api_key:
            raise MissingAPIKeyError("Clearing the cache requires the configured X-API-Key")

    size = request.app.state.cache.clear()
    logger.info("Cache cleared")
    return {"message": "Cache cleared", "size": size}
