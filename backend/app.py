"""FastAPI application entry point for the OddsEngine proxy."""

import logging
import os
import sys

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.cache import ResponseCache
from services.proxy import ProxyService

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    cache: ResponseCache | None = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="OddsEngine Proxy", version="1.0.0")

    cache = cache if cache is not None else ResponseCache()
    app.state.settings = settings
    app.state.cache = cache
    app.state.proxy = ProxyService(cache, settings, transport=transport)

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # CORS: every response is stamped, preflights short-circuit with 204
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(settings.cors_headers(request.headers.get("origin")))
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.proxy import router as proxy_router
    from routes.status import router as status_router

    app.include_router(health_router)
    app.include_router(proxy_router)
    app.include_router(status_router)

    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir), name="static")

    @app.on_event("startup")
    async def _startup_banner() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (requests without X-API-Key will fail): %s", ", ".join(missing))
        logger.info("OddsEngine Proxy Server running on http://localhost:%d", settings.port)
        logger.info("API Key: %s", "configured" if settings.api_key_configured else "missing")
        logger.info("Cache Duration: %dms", settings.cache_ttl_ms)
        logger.info("CORS: enabled for %s", ", ".join(settings.cors_origins))

    @app.on_event("shutdown")
    async def _clear_cache_on_shutdown() -> None:
        logger.info("Shutting down gracefully...")
        cache.clear()

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    main()
