"""
Profile picture lookup by username against the public username API.

Hits are cached for the resolver's lifetime; misses and failures are not cached
and always degrade to None.
"""

from __future__ import annotations

import threading
from urllib.parse import quote

import httpx

from backend_lingua.config import Settings, get_settings
from backend_lingua.lingua_logging import get_logger

logger = get_logger(__name__)


class ProfilePictureResolver:
    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None) -> None:
        self._settings = settings or get_settings()
        self._client = client
        self._cache: dict[str, str] = {}
        self._lock = threading.Lock()

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url)
        with httpx.Client(timeout=self._settings.http_timeout_sec) as client:
            return client.get(url)

    def cached(self, username: str) -> str | None:
        with self._lock:
            return self._cache.get(username)

    def fetch(self, username: str | None) -> str | None:
        """Return the minimized (or full) picture URL for username, or None."""
        username = (username or "").strip()
        if not username:
            return None
        hit = self.cached(username)
        if hit:
            return hit

        if username in (".", ".."):
            return None
        url = f"{self._settings.username_api_url}/{quote(username, safe='')}"
        try:
            response = self._get(url)
            if response.is_error:
                logger.debug("profile_picture_not_found", username=username, status_code=response.status_code)
                return None
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("profile_picture_fetch_failed", username=username, error=str(e))
            return None

        picture = None
        if isinstance(data, dict):
            picture = data.get("minimized_profile_picture_url") or data.get("profile_picture_url") or None
        if picture:
            with self._lock:
                self._cache[username] = picture
        return picture
