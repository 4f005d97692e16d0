"""
Process settings read from environment variables.

Everything here is read lazily (at call time) so tests can monkeypatch the
environment without reloading modules.
"""

from __future__ import annotations

import os


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


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return raw not in {"0", "false", "False", "no"}


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def rapid_proxy_secret() -> str | None:
    """
    When set, only requests forwarded by the RapidAPI proxy are served.
    """
    return os.environ.get("RAPID_PROXY_SECRET", "").strip() or None


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def soccer_cache_seconds() -> float:
    # Kept in milliseconds for compatibility with existing deployments.
    ms = _env_int("CACHE_MS", 60_000)
    if ms <= 0:
        ms = 60_000
    return ms / 1000.0


def preload_hebrew_names() -> bool:
    return _env_bool("PRELOAD_HEBREW_NAMES", True)


def rail_api_key() -> str:
    # Public key shipped in the rail.co.il front-end.
    return _env_str("RAIL_API_KEY", "5e64d66cf03f4547bcac5de2de06b566")
