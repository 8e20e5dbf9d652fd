"""Forwarding route — everything under /v1 goes to OddsEngine."""

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse

from errors import ProxyServiceError, error_response

router = APIRouter()


def _raw_path(request: Request) -> str:
    """Inbound path with its original percent-encoding intact."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    return raw_path.decode("latin-1").split("?", 1)[0]


@router.get("/v1/{path:path}")
async def proxy_v1(request: Request, path: str, x_api_key: str | None = Header(None)):
    """Proxy GET /v1/<path>?<query> to the upstream API, serving from cache when fresh."""
    service = request.app.state.proxy
    try:
        status_code, body = await service.handle(
            _raw_path(request),
            request.query_params.multi_items(),
            x_api_key,
        )
    except ProxyServiceError as e:
        return error_response(e)
    return JSONResponse(body, status_code=status_code)
