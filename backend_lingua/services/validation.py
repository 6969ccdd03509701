"""Input checks shared by services. All raise ValidationError before any store access."""

from __future__ import annotations

from typing import Any

from backend_lingua.core.exceptions import ValidationError

MAX_WALLET_LEN = 64


def require_wallet(value: Any, field_name: str) -> str:
    """Return the stripped wallet or raise ValidationError naming the missing field."""
    wallet = value.strip() if isinstance(value, str) else ""
    if not wallet:
        raise ValidationError(f"Missing required field: {field_name}")
    if len(wallet) > MAX_WALLET_LEN:
        raise ValidationError(f"{field_name} is too long")
    return wallet


def optional_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default
