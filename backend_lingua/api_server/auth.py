"""
Identity context: the wallet address of the current request.

Sessions are issued by the external wallet-auth provider as bearer tokens of the
form "<wallet>.<hex HMAC-SHA256(wallet, SESSION_SECRET)>".
"""

from __future__ import annotations

import hashlib
import hmac

from fastapi import Header

from backend_lingua.config.env import get_session_secret
from backend_lingua.core.exceptions import Unauthenticated
from backend_lingua.lingua_logging import get_logger, short_wallet

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


def sign_wallet(wallet: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), wallet.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_session_token(wallet: str, secret: str | None = None) -> str:
    """Mint a session token for wallet (secret defaults to SESSION_SECRET)."""
    secret = secret if secret is not None else get_session_secret()
    if not secret:
        raise RuntimeError("SESSION_SECRET is not configured")
    wallet = wallet.strip()
    return f"{wallet}.{sign_wallet(wallet, secret)}"


def verify_session_token(token: str, secret: str) -> str:
    """Return the wallet carried by token or raise Unauthenticated."""
    if not secret:
        logger.error("session_secret_missing")
        raise Unauthenticated("Unauthorized")
    wallet, sep, signature = (token or "").strip().rpartition(".")
    if not sep or not wallet or not signature:
        raise Unauthenticated("Unauthorized")
    if not hmac.compare_digest(sign_wallet(wallet, secret), signature.lower()):
        logger.info("session_token_rejected", wallet=short_wallet(wallet))
        raise Unauthenticated("Unauthorized")
    return wallet


def current_wallet(authorization: str | None = Header(None)) -> str:
    """FastAPI dependency: verified wallet of the caller."""
    raw = (authorization or "").strip()
    if not raw.lower().startswith(BEARER_PREFIX):
        raise Unauthenticated("Unauthorized")
    return verify_session_token(raw[len(BEARER_PREFIX):], get_session_secret())
