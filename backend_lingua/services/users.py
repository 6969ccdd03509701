"""
User profiles: onboarding save (upsert by wallet) and partner search.
"""

from __future__ import annotations

from typing import Any

from backend_lingua.core.exceptions import Forbidden, NotFound, ValidationError
from backend_lingua.database import repositories
from backend_lingua.database.models import UserRecord, dedupe_codes
from backend_lingua.lingua_logging import get_logger, short_wallet
from backend_lingua.services.profiles import profile_from_user
from backend_lingua.services.validation import optional_text, require_wallet

logger = get_logger(__name__)

SORT_BEST = "best"
SORT_NEWEST = "newest"
SORT_OPTIONS = (SORT_BEST, SORT_NEWEST)

DEFAULT_USERNAME = "user"
REQUIRED_PROFILE_FIELDS = ("name", "country", "country_code")


def save_profile(session_wallet: str, payload: dict[str, Any]) -> UserRecord:
    """
    Create or update the session wallet's profile.

    Raises:
        Forbidden: payload names a wallet_address other than the session's.
        ValidationError: name, country or country_code missing.
    """
    session_wallet = require_wallet(session_wallet, "wallet")
    claimed = optional_text(payload.get("wallet_address"))
    if claimed and claimed != session_wallet:
        logger.warning("profile_wallet_mismatch", wallet=short_wallet(session_wallet), claimed=short_wallet(claimed))
        raise Forbidden("Wallet address mismatch")

    profile = {
        "username": optional_text(payload.get("username"), DEFAULT_USERNAME),
        "profile_picture_url": optional_text(payload.get("profile_picture_url")) or None,
        "name": optional_text(payload.get("name")),
        "country": optional_text(payload.get("country")),
        "country_code": optional_text(payload.get("country_code")),
        "native_languages": dedupe_codes(payload.get("native_languages")),
        "learning_languages": dedupe_codes(payload.get("learning_languages")),
        "notifications_enabled": bool(payload.get("notifications_enabled") or False),
    }
    if not all(profile[f] for f in REQUIRED_PROFILE_FIELDS):
        raise ValidationError("Missing required fields: name, country, country_code")
    return repositories.upsert_user(session_wallet, profile)


def get_profile(wallet: str) -> UserRecord:
    wallet = require_wallet(wallet, "wallet")
    user = repositories.get_user(wallet)
    if user is None:
        raise NotFound(f"No user found for wallet {wallet[:8]}...")
    return user


def search_users(
    language: str | None = None,
    exclude_wallet: str | None = None,
    sort: str = SORT_BEST,
) -> list[UserRecord]:
    """
    Users who speak or learn `language` (all users when None), without exclude_wallet.
    sort="newest": created_at desc. sort="best": quality_score desc, then created_at desc.
    """
    sort = (sort or SORT_BEST).strip().lower()
    if sort not in SORT_OPTIONS:
        raise ValidationError(f"sort must be one of: {', '.join(SORT_OPTIONS)}")
    language = optional_text(language) or None
    exclude_wallet = optional_text(exclude_wallet) or None

    users = repositories.list_users(exclude_wallet=exclude_wallet)
    if language:
        users = [u for u in users if profile_from_user(u).speaks(language)]
    if sort == SORT_BEST:
        # list_users is already newest first; a stable sort keeps that as the tie-break
        users = sorted(users, key=lambda u: u.quality_score, reverse=True)
    logger.debug("users_searched", language=language, sort=sort, count=len(users))
    return users
