"""
Push notifications through the mini-app host.

The API layer calls NotificationDispatcher after a new contact is recorded; the
contact service itself never does.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from backend_lingua.config import Settings, get_settings
from backend_lingua.core.exceptions import LinguaError, UpstreamFailure
from backend_lingua.lingua_logging import get_logger, short_wallet
from backend_lingua.services.validation import optional_text, require_wallet

logger = get_logger(__name__)

NOTIFICATION_TITLE = "\U0001f4ac New Lingua message!"
MINI_APP_PATH = "/home"
DEFAULT_SENDER_NAME = "Someone"


def build_chat_request_payload(app_id: str, sender_name: str, target_wallet: str) -> dict[str, Any]:
    sender = optional_text(sender_name, DEFAULT_SENDER_NAME)
    return {
        "app_id": app_id,
        "wallet_addresses": [target_wallet],
        "title": NOTIFICATION_TITLE,
        "message": f"{sender} wants to practice languages with you! Check your message requests in World Chat.",
        "mini_app_path": quote(MINI_APP_PATH, safe=""),
    }


class NotificationDispatcher:
    """Sends chat-request notifications. Pass `client` to reuse or mock the HTTP client."""

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None) -> None:
        self._settings = settings or get_settings()
        self._client = client

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self._settings.notification_url, json=payload)
        with httpx.Client(timeout=self._settings.http_timeout_sec) as client:
            return client.post(self._settings.notification_url, json=payload)

    def send_chat_request(self, sender_name: str | None, target_wallet: str) -> dict[str, Any]:
        """
        Notify target_wallet that sender_name wants to chat. Returns the host's JSON reply.

        Raises:
            ValidationError: target_wallet missing.
            LinguaError: APP_ID not configured.
            UpstreamFailure: transport error or non-2xx reply.
        """
        target_wallet = require_wallet(target_wallet, "wallet_address")
        if not self._settings.app_id:
            logger.error("notification_app_id_missing")
            raise LinguaError("App not configured for notifications")

        payload = build_chat_request_payload(self._settings.app_id, sender_name or "", target_wallet)
        try:
            response = self._post(payload)
        except httpx.HTTPError as e:
            logger.warning("notification_send_error", target=short_wallet(target_wallet), error=str(e))
            raise UpstreamFailure("Failed to send notification") from e

        try:
            result: Any = response.json()
        except ValueError:
            result = {"body": response.text}
        if response.is_error:
            logger.warning(
                "notification_send_rejected",
                target=short_wallet(target_wallet),
                status_code=response.status_code,
            )
            raise UpstreamFailure("Failed to send notification", details=result, status_code=response.status_code)
        logger.info("notification_sent", target=short_wallet(target_wallet))
        return result
