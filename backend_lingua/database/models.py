"""
Domain records for database entities.

Users, contact edges (with their frozen profile snapshot) and rating edges.
Returned by the repository layer; no ORM objects leak past it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Sentinel country code for snapshots saved without one
UNKNOWN_COUNTRY_CODE = "XX"


def dedupe_codes(codes: list[str] | tuple[str, ...] | None) -> list[str]:
    """Language codes as an ordered set: strip blanks, keep first occurrence."""
    out: list[str] = []
    for code in codes or []:
        code = (str(code) if code is not None else "").strip()
        if code and code not in out:
            out.append(code)
    return out


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class ContactSnapshot:
    """Profile fields frozen onto a contact edge when the contact is recorded."""

    username: str = ""
    name: str = ""
    country: str = ""
    country_code: str = UNKNOWN_COUNTRY_CODE
    profile_picture_url: str | None = None
    native_languages: list[str] = field(default_factory=list)
    learning_languages: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        """Stored JSON shape of contacts.contact_data (camelCase keys)."""
        return {
            "username": self.username,
            "name": self.name,
            "country": self.country,
            "countryCode": self.country_code,
            "profilePictureUrl": self.profile_picture_url,
            "nativeLanguages": list(self.native_languages),
            "learningLanguages": list(self.learning_languages),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "ContactSnapshot":
        data = data or {}
        return cls(
            username=data.get("username") or "",
            name=data.get("name") or "",
            country=data.get("country") or "",
            country_code=data.get("countryCode") or UNKNOWN_COUNTRY_CODE,
            profile_picture_url=data.get("profilePictureUrl") or None,
            native_languages=dedupe_codes(data.get("nativeLanguages")),
            learning_languages=dedupe_codes(data.get("learningLanguages")),
        )


@dataclass
class UserRecord:
    """Stored user profile. quality_score is a cached sum of received ratings."""

    id: int | None
    wallet_address: str
    username: str
    name: str
    country: str
    country_code: str
    profile_picture_url: str | None = None
    native_languages: list[str] = field(default_factory=list)
    learning_languages: list[str] = field(default_factory=list)
    notifications_enabled: bool = False
    quality_score: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_snapshot(self) -> ContactSnapshot:
        """Current profile as the snapshot shape stored on contact edges."""
        return ContactSnapshot(
            username=self.username or "",
            name=self.name or "",
            country=self.country or "",
            country_code=self.country_code or UNKNOWN_COUNTRY_CODE,
            profile_picture_url=self.profile_picture_url,
            native_languages=list(self.native_languages),
            learning_languages=list(self.learning_languages),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "wallet_address": self.wallet_address,
            "username": self.username,
            "profile_picture_url": self.profile_picture_url,
            "name": self.name,
            "country": self.country,
            "country_code": self.country_code,
            "native_languages": list(self.native_languages),
            "learning_languages": list(self.learning_languages),
            "notifications_enabled": self.notifications_enabled,
            "quality_score": self.quality_score,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


@dataclass
class ContactEdge:
    """Directed contact from user_wallet (initiator) to contact_wallet (target)."""

    id: int | None
    user_wallet: str
    contact_wallet: str
    contact_data: ContactSnapshot
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_wallet": self.user_wallet,
            "contact_wallet": self.contact_wallet,
            "contact_data": self.contact_data.to_json(),
            "created_at": isoformat(self.created_at),
        }


@dataclass
class RatingEdge:
    """Signed rating (+1 / -1) from rater_wallet to rated_wallet."""

    id: int | None
    rater_wallet: str
    rated_wallet: str
    rating: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
