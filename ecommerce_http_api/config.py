# ecommerce_http_api/config.py

"""
Configuration for the E-commerce HTTP API.

All tunables live on a single pydantic-settings ``Settings`` class. Values are
read from the process environment and, when present, from a local ``.env``
file.

Recognized environment variables
================================

- APP_ENV            development | production | testing (default: development)
- DEBUG              enables FastAPI debug mode
- API_PREFIX         mount point of the resource routers (default: "/api")
- HOST / PORT        bind address for ``python -m ecommerce_http_api.main``
- CORS_ORIGINS       comma-separated origins, "*" allows everything
- DATABASE_URL       SQLAlchemy URL (default: local SQLite file)
- DATABASE_ECHO      log every SQL statement
- DATABASE_CREATE_ALL  create missing tables on startup
- BCRYPT_ROUNDS      cost factor for password hashing
- LOG_LEVEL / LOG_FORMAT  logging policy ("json" or "console")

Typical usage
=============

    from ecommerce_http_api.config import get_settings

    settings = get_settings()
    app = create_app(settings)
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central configuration registry for the HTTP API.
    """

    # --- Application meta ---
    APP_NAME: str = "ecommerce-api"
    APP_VERSION: str = "1.0.0"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- HTTP ---
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "http://localhost:4200,http://localhost:3000"

    # --- Persistence ---
    DATABASE_URL: str = "sqlite:///./ecommerce.db"
    DATABASE_ECHO: bool = False
    DATABASE_CREATE_ALL: bool = True

    # --- Security ---
    BCRYPT_ROUNDS: int = 12

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == AppEnv.DEVELOPMENT

    @property
    def cors_origins(self) -> List[str]:
        """
        Parse ``CORS_ORIGINS`` into a list; "*" (or empty) means all origins.
        """
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    @property
    def api_prefix(self) -> str:
        prefix = self.API_PREFIX.strip()
        if not prefix or prefix == "/":
            return ""
        if not prefix.startswith("/"):
            prefix = "/" + prefix
        return prefix.rstrip("/")


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Return the process-wide Settings instance, building it from the
    environment on first use.
    """
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings()
    return _SETTINGS


def set_settings(settings: Optional[Settings]) -> None:
    """
    Replace (or with ``None``, reset) the process-wide Settings instance.

    Mainly useful for tests.
    """
    global _SETTINGS
    _SETTINGS = settings


__all__ = ["AppEnv", "Settings", "get_settings", "set_settings"]
