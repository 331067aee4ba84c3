"""
Environment-driven settings.

Everything is read lazily from `os.environ` so tests (and uvicorn reloads)
see the current values. Malformed numbers fall back to defaults.
"""

from __future__ import annotations

import os
from urllib.parse import quote


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _dsn_from_parts() -> str:
    user = os.environ.get("APP_DB_USERNAME", "").strip()
    name = os.environ.get("APP_DB_NAME", "").strip()
    if not user or not name:
        return ""

    password = os.environ.get("APP_DB_PASSWORD", "")
    host = _env_str("APP_DB_HOST", "localhost")
    port = _env_int("APP_DB_PORT", 5432)
    credentials = quote(user, safe="")
    if password:
        credentials += ":" + quote(password, safe="")
    return f"postgresql://{credentials}@{host}:{port}/{quote(name, safe='')}"


def raw_database_url() -> str:
    """
    `DATABASE_URL` wins; otherwise the DSN is assembled from the
    APP_DB_* variables. Returns "" when neither is configured.
    """
    return os.environ.get("DATABASE_URL", "").strip() or _dsn_from_parts()


def pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def api_host() -> str:
    return _env_str("API_HOST", "0.0.0.0")


def api_port() -> int:
    return _env_int("API_PORT", 8080)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
