"""
Read-only profile views with two sources.

A profile shown to a user either comes from a live users row (LiveProfile) or
from the snapshot frozen on a contact edge (SnapshotProfile). Both share the
ProfileView fields; `source` tells them apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Union

from backend_lingua.database.models import ContactEdge, UserRecord, isoformat


@dataclass(frozen=True)
class ProfileView:
    wallet_address: str
    username: str
    name: str
    country: str
    country_code: str
    profile_picture_url: str | None
    native_languages: tuple[str, ...]
    learning_languages: tuple[str, ...]
    created_at: datetime | None

    source: ClassVar[str] = ""

    @property
    def quality_score(self) -> int:
        return 0

    @property
    def notifications_enabled(self) -> bool:
        return False

    def speaks(self, language: str) -> bool:
        """True if language is one of the native or learning languages."""
        return language in self.native_languages or language in self.learning_languages

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "walletAddress": self.wallet_address,
            "username": self.username,
            "name": self.name,
            "country": self.country,
            "countryCode": self.country_code,
            "profilePictureUrl": self.profile_picture_url,
            "nativeLanguages": list(self.native_languages),
            "learningLanguages": list(self.learning_languages),
            "createdAt": isoformat(self.created_at),
            "notificationsEnabled": self.notifications_enabled,
            "qualityScore": self.quality_score,
        }


@dataclass(frozen=True)
class LiveProfile(ProfileView):
    """Profile read from the users table."""

    live_quality_score: int = 0
    live_notifications_enabled: bool = False

    source: ClassVar[str] = "live"

    @property
    def quality_score(self) -> int:
        return self.live_quality_score

    @property
    def notifications_enabled(self) -> bool:
        return self.live_notifications_enabled


@dataclass(frozen=True)
class SnapshotProfile(ProfileView):
    """Profile frozen on a contact edge; never refreshed from the users table."""

    source: ClassVar[str] = "snapshot"


Profile = Union[LiveProfile, SnapshotProfile]


def profile_from_user(user: UserRecord) -> LiveProfile:
    return LiveProfile(
        wallet_address=user.wallet_address,
        username=user.username,
        name=user.name,
        country=user.country,
        country_code=user.country_code,
        profile_picture_url=user.profile_picture_url,
        native_languages=tuple(user.native_languages),
        learning_languages=tuple(user.learning_languages),
        created_at=user.created_at,
        live_quality_score=user.quality_score,
        live_notifications_enabled=user.notifications_enabled,
    )


def profile_from_contact(edge: ContactEdge) -> SnapshotProfile:
    """Snapshot profile of the edge's target (contact_wallet)."""
    data = edge.contact_data
    return SnapshotProfile(
        wallet_address=edge.contact_wallet,
        username=data.username,
        name=data.name,
        country=data.country,
        country_code=data.country_code,
        profile_picture_url=data.profile_picture_url,
        native_languages=tuple(data.native_languages),
        learning_languages=tuple(data.learning_languages),
        created_at=edge.created_at,
    )
