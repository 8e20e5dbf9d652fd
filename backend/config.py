"""Centralized configuration — all env vars in one place."""

import os

from dotenv import find_dotenv, load_dotenv

UPSTREAM_BASE_URL = "https://api.oddsengine.dev"
CACHE_TTL_MS = 60 * 1000

CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, X-API-Key, Authorization"


def load_env_file(path: str | os.PathLike | None = None) -> bool:
    """Load a .env file into os.environ without overriding variables already set.

    Without a path, the nearest .env from the working directory upward is used.
    """
    return load_dotenv(path or find_dotenv(usecwd=True))


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables.

    Keyword arguments override the environment; tests use them to build
    isolated settings without touching os.environ.
    """

    def __init__(
        self,
        api_key: str | None = None,
        port: int | None = None,
        cache_ttl_ms: int = CACHE_TTL_MS,
        upstream_base_url: str = UPSTREAM_BASE_URL,
        static_dir: str | None = None,
        cache_clear_requires_key: bool | None = None,
    ):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = port if port is not None else int(os.getenv("PORT", "3001"))

        # OddsEngine upstream
        self.upstream_base_url: str = upstream_base_url.rstrip("/")
        self.api_key: str | None = api_key if api_key is not None else os.getenv("ODDSENGINE_API_KEY")
        self.cache_ttl_ms: int = cache_ttl_ms

        self.static_dir: str = static_dir if static_dir is not None else os.getenv("STATIC_DIR", "public")
        if cache_clear_requires_key is None:
            cache_clear_requires_key = _env_flag("CACHE_CLEAR_REQUIRES_KEY")
        self.cache_clear_requires_key: bool = cache_clear_requires_key

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_ms / 1000

    def validate(self) -> list[str]:
        """Return list of missing env vars the proxy can run without."""
        missing = []
        if not self.api_key:
            missing.append("ODDSENGINE_API_KEY")
        return missing

    def cors_headers(self, origin: str | None = None) -> dict[str, str]:
        """Cross-origin headers stamped on every response."""
        headers = {
            "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        }
        if "*" in self.cors_origins:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin and origin in self.cors_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return headers


load_env_file()
settings = Settings()
