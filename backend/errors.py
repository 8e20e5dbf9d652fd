"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProxyServiceError(Exception):
    """Base exception with HTTP status code and error kind."""

    kind = "proxy_error"

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class MissingAPIKeyError(ProxyServiceError):
    kind = "missing_api_key"

    def __init__(self, message: str = "API key required via X-API-Key header or ODDSENGINE_API_KEY env var"):
        super().__init__(message, status_code=401)


class UpstreamAPIError(ProxyServiceError):
    """Upstream answered with a non-2xx status; relayed to the caller as-is."""

    kind = "api_error"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message, "status": self.status_code}


class ProxyError(ProxyServiceError):
    kind = "proxy_error"


def error_response(exc: ProxyServiceError) -> JSONResponse:
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(ProxyServiceError)
    async def handle_proxy_service_error(_request: Request, exc: ProxyServiceError):
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        response = error_response(ProxyError(str(exc) or "Internal server error"))
        # Rendered outside the middleware stack, so CORS headers are added here
        settings = getattr(request.app.state, "settings", None)
        if settings is not None:
            response.headers.update(settings.cors_headers(request.headers.get("origin")))
        return response
