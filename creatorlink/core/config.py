"""Configuration module for the CreatorLink inquiry service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from creatorlink.core.exceptions import ConfigurationError

load_dotenv()

DRAFT_STORE_BACKENDS = {"memory", "database"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_logger_levels(raw: str) -> tuple[tuple[str, str], ...]:
    """Parse ``name=LEVEL`` pairs, e.g. ``creatorlink.storage=DEBUG,urllib3=ERROR``."""
    levels = []
    for item in raw.split(","):
        if not item.strip():
            continue
        name, sep, level = item.partition("=")
        name, level = name.strip(), level.strip().upper()
        if not sep or not name or level not in LOG_LEVELS:
            raise ConfigurationError(f"LOGGER_LEVELS entry {item.strip()!r} must look like logger=LEVEL.")
        levels.append((name, level))
    return tuple(levels)


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    API_BASE_URL: str
    API_TIMEOUT_SECONDS: int
    AUTH_SCHEME: str
    AUTOSAVE_INTERVAL_SECONDS: float
    DRAFT_STORE_BACKEND: str
    DATABASE_URL: str
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str
    LOGGER_LEVELS: tuple[tuple[str, str], ...]
    SESSION_IDLE_TIMEOUT_SECONDS: float
    SESSION_MAX_ACTIVE: int

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="CreatorLink",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        API_BASE_URL=os.getenv("API_BASE_URL", "http://localhost:8000/api").rstrip("/"),
        API_TIMEOUT_SECONDS=int(os.getenv("API_TIMEOUT_SECONDS", "30")),
        AUTH_SCHEME=os.getenv("AUTH_SCHEME", "Token").strip(),
        AUTOSAVE_INTERVAL_SECONDS=float(os.getenv("AUTOSAVE_INTERVAL_SECONDS", "30")),
        DRAFT_STORE_BACKEND=os.getenv("DRAFT_STORE_BACKEND", "memory").strip().lower(),
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./creatorlink.db"),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8080")),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
        LOGGER_LEVELS=_parse_logger_levels(os.getenv("LOGGER_LEVELS", "")),
        SESSION_IDLE_TIMEOUT_SECONDS=float(os.getenv("SESSION_IDLE_TIMEOUT_SECONDS", "1800")),
        SESSION_MAX_ACTIVE=int(os.getenv("SESSION_MAX_ACTIVE", "500")),
    )
    _validate_config(config)
    return config


def _validate_api_base_url(api_base_url: str) -> None:
    parsed = urlparse(api_base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise ConfigurationError("API_BASE_URL must be an absolute http:// or https:// URL.")


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_api_base_url(config.API_BASE_URL)
    _validate_database_url(config.DATABASE_URL)

    if config.API_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("API_TIMEOUT_SECONDS must be >= 1.")
    if config.AUTOSAVE_INTERVAL_SECONDS <= 0:
        raise ConfigurationError("AUTOSAVE_INTERVAL_SECONDS must be > 0.")
    if config.DRAFT_STORE_BACKEND not in DRAFT_STORE_BACKENDS:
        raise ConfigurationError("DRAFT_STORE_BACKEND must be one of memory/database.")
    if not config.AUTH_SCHEME:
        raise ConfigurationError("AUTH_SCHEME must not be empty.")
    if config.SESSION_IDLE_TIMEOUT_SECONDS <= 0:
        raise ConfigurationError("SESSION_IDLE_TIMEOUT_SECONDS must be > 0.")
    if config.SESSION_MAX_ACTIVE < 1:
        raise ConfigurationError("SESSION_MAX_ACTIVE must be >= 1.")
    if config.LOG_LEVEL not in LOG_LEVELS:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and config.API_BASE_URL.startswith("http://localhost"):
        raise ConfigurationError("Production API_BASE_URL points at localhost.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
