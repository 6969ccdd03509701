"""
Environment variable loading for Lingua.

- LINGUA_DB_URL / DATABASE_URL: SQLAlchemy URL (PostgreSQL in production)
- DATABASE_PATH: SQLite file used when no URL is set (default: lingua.db)
- SESSION_SECRET / HMAC_SECRET_KEY: key for verifying session tokens
- APP_ID: mini-app id used for push notifications
- NOTIFICATION_URL, USERNAME_API_URL: external hosts
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is backend_lingua/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SQLITE_PATH = "lingua.db"
DEFAULT_NOTIFICATION_URL = "https://developer.worldcoin.org/api/v2/minikit/send-notification"
DEFAULT_USERNAME_API_URL = "https://usernames.worldcoin.org/api/v1"
DEFAULT_HTTP_TIMEOUT_SEC = 10.0


def load_lingua_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set vars."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH, override=False)


def get_database_url() -> str:
    """Return LINGUA_DB_URL or DATABASE_URL if set; else a SQLite URL from DATABASE_PATH or default."""
    load_lingua_env()
    url = (os.getenv("LINGUA_DB_URL") or os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url
    path = (os.getenv("DATABASE_PATH") or "").strip() or DEFAULT_SQLITE_PATH
    return f"sqlite:///{path}"


def get_session_secret() -> str:
    """
    Return the HMAC key for session tokens.
    Empty string when unset; the auth layer then rejects every token.
    """
    load_lingua_env()
    return (os.getenv("SESSION_SECRET") or os.getenv("HMAC_SECRET_KEY") or "").strip()


def get_app_id() -> str:
    load_lingua_env()
    return (os.getenv("APP_ID") or os.getenv("NEXT_PUBLIC_APP_ID") or "").strip()


def get_notification_url() -> str:
    load_lingua_env()
    return (os.getenv("NOTIFICATION_URL") or "").strip() or DEFAULT_NOTIFICATION_URL


def get_username_api_url() -> str:
    load_lingua_env()
    url = (os.getenv("USERNAME_API_URL") or "").strip() or DEFAULT_USERNAME_API_URL
    return url.rstrip("/")


def get_http_timeout_sec() -> float:
    load_lingua_env()
    raw = (os.getenv("HTTP_TIMEOUT_SEC") or "").strip()
    try:
        return float(raw) if raw else DEFAULT_HTTP_TIMEOUT_SEC
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT_SEC


def mask_database_url(url: str) -> str:
    """Strip credentials and query string from a DB URL for logging."""
    return url.split("?")[0].split("@")[-1].split("//")[-1]
