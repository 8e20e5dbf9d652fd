"""Human-readable status page served at the root URL."""

from html import escape

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter()

_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>OddsEngine Proxy</title>
    <style>
      body {{ font-family: system-ui, -apple-system, sans-serif; background: #0f172a; color: white; padding: 40px; margin: 0; }}
      .container {{ max-width: 800px; margin: 0 auto; }}
      h1 {{ color: #a855f7; }}
      .status {{ border: 1px solid #a855f7; border-radius: 8px; padding: 20px; margin: 20px 0; }}
      .status-item {{ display: flex; justify-content: space-between; margin: 10px 0; }}
      a {{ color: #a855f7; text-decoration: none; }}
      .check {{ color: #10b981; font-weight: bold; }}
      .cross {{ color: #ef4444; font-weight: bold; }}
    </style>
  </head>
  <body>
    <div class="container">
      <h1>OddsEngine Proxy Server</h1>
      <div class="status">
        <h3>Server Status</h3>
        <div class="status-item"><span>Port:</span><span class="check">{port}</span></div>
        <div class="status-item"><span>API Key:</span><span class="{key_class}">{key_label}</span></div>
        <div class="status-item"><span>Cache Size:</span><span>{cache_size} items</span></div>
        <div class="status-item"><span>Base URL:</span><span>{base_url}</span></div>
      </div>
      <div class="status">
        <h3>Available Tools</h3>
        <ul>
          <li><a href="/arb-scanner.html">Arb Scanner</a></li>
          <li><a href="/parlay-builder.html">Parlay Builder</a></li>
        </ul>
      </div>
      <div class="status">
        <h3>API Endpoints</h3>
        <ul>
          <li><a href="/health">GET /health</a> - Health check</li>
          <li>GET /v1/events?league=NBA - List events</li>
          <li>GET /v1/odds?event_id=XXX - Get odds</li>
          <li>POST /cache/clear - Clear cache</li>
        </ul>
      </div>
    </div>
  </body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def status_page(request: Request) -> str:
    settings = request.app.state.settings
    configured = settings.api_key_configured
    return _PAGE.format(
        port=settings.port,
        key_class="check" if configured else "cross",
        key_label="Configured" if configured else "Missing",
        cache_size=request.app.state.cache.size(),
        base_url=escape(str(request.base_url).rstrip("/")),
    )
