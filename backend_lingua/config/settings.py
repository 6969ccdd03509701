"""
Application settings.

get_settings() builds a Settings object from the environment on every call, so
tests can monkeypatch env vars without clearing a cache.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from backend_lingua.config import env


@dataclass(frozen=True)
class Settings:
    """Typed view of the service configuration."""

    database_url: str
    session_secret: str
    app_id: str
    notification_url: str
    username_api_url: str
    http_timeout_sec: float
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"


def get_settings() -> Settings:
    """
    Return the current application settings.

    Returns:
        Settings with database_url, session_secret, app_id, notification_url,
        username_api_url, http_timeout_sec, api_host, api_port and log_level.
    """
    env.load_lingua_env()
    return Settings(
        database_url=env.get_database_url(),
        session_secret=env.get_session_secret(),
        app_id=env.get_app_id(),
        notification_url=env.get_notification_url(),
        username_api_url=env.get_username_api_url(),
        http_timeout_sec=env.get_http_timeout_sec(),
        api_host=os.getenv("API_HOST", "0.0.0.0").strip(),
        api_port=int(os.getenv("API_PORT", "8000").strip() or "8000"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
