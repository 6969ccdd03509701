"""
Contact reconciliation.

A contact relationship is stored as directed edges: A -> B when A started a chat
with B. list_contacts() merges the edges a wallet initiated with the edges others
initiated towards it, so each counterpart appears once regardless of who reached
out first. The initiated fetch is required; the received side is enrichment and
degrades to nothing on store errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from backend_lingua.core.exceptions import StoreFailure
from backend_lingua.database import repositories
from backend_lingua.database.models import (
    UNKNOWN_COUNTRY_CODE,
    ContactEdge,
    ContactSnapshot,
    UserRecord,
    dedupe_codes,
    isoformat,
)
from backend_lingua.lingua_logging import bind_wallet, get_logger, short_wallet
from backend_lingua.services.profiles import SnapshotProfile, profile_from_contact
from backend_lingua.services.validation import optional_text, require_wallet

logger = get_logger(__name__)


@dataclass(frozen=True)
class ContactView:
    """One entry of a contact list: the counterpart, their snapshot, and who reached out."""

    id: int | None
    contact_wallet: str
    snapshot: ContactSnapshot
    created_at: datetime
    initiated_by_them: bool

    @classmethod
    def from_initiated(cls, edge: ContactEdge) -> "ContactView":
        return cls(
            id=edge.id,
            contact_wallet=edge.contact_wallet,
            snapshot=edge.contact_data,
            created_at=edge.created_at,
            initiated_by_them=False,
        )

    @classmethod
    def from_received(cls, edge: ContactEdge, initiator: UserRecord) -> "ContactView":
        """
        The edge's own snapshot describes us, so the initiator's current profile
        is used and contact_wallet is swapped to point at them.
        """
        return cls(
            id=edge.id,
            contact_wallet=edge.user_wallet,
            snapshot=initiator.to_snapshot(),
            created_at=edge.created_at,
            initiated_by_them=True,
        )

    def to_profile(self) -> SnapshotProfile:
        return profile_from_contact(
            ContactEdge(
                id=self.id,
                user_wallet="",
                contact_wallet=self.contact_wallet,
                contact_data=self.snapshot,
                created_at=self.created_at,
            )
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "contact_wallet": self.contact_wallet,
            "contact_data": self.snapshot.to_json(),
            "created_at": isoformat(self.created_at),
            "initiated_by_them": self.initiated_by_them,
        }


def merge_contacts(views: Iterable[ContactView]) -> list[ContactView]:
    """
    Deduplicate by contact_wallet keeping the entry with the later created_at
    (on equal timestamps the first seen wins), then sort newest first.
    """
    by_wallet: dict[str, ContactView] = {}
    for view in views:
        existing = by_wallet.get(view.contact_wallet)
        if existing is None or view.created_at > existing.created_at:
            by_wallet[view.contact_wallet] = view
    return sorted(by_wallet.values(), key=lambda v: v.created_at, reverse=True)


def _received_views(self_wallet: str, log: Any) -> list[ContactView]:
    """Edges others initiated towards self_wallet, resolved to the initiator's profile."""
    try:
        received = repositories.list_contacts_received(self_wallet)
    except StoreFailure as e:
        log.warning("contacts_received_degraded", error=str(e))
        return []
    if not received:
        return []
    try:
        users = repositories.get_users_by_wallets(edge.user_wallet for edge in received)
    except StoreFailure as e:
        log.warning("contacts_received_resolve_degraded", error=str(e))
        return []

    views = []
    for edge in received:
        initiator = users.get(edge.user_wallet)
        if initiator is None:
            log.debug("contacts_received_unresolved", initiator=short_wallet(edge.user_wallet))
            continue
        views.append(ContactView.from_received(edge, initiator))
    return views


def list_contacts(self_wallet: str) -> list[ContactView]:
    """
    Return the deduplicated contact list for self_wallet, newest first.

    Raises:
        ValidationError: self_wallet is empty.
        StoreFailure: the initiated-contacts fetch failed.
    """
    self_wallet = require_wallet(self_wallet, "wallet")
    initiated = [ContactView.from_initiated(e) for e in repositories.list_contacts_initiated(self_wallet)]
    log = bind_wallet(self_wallet, __name__)
    received = _received_views(self_wallet, log)
    contacts = merge_contacts([*initiated, *received])
    log.info(
        "contacts_listed",
        initiated=len(initiated),
        received=len(received),
        total=len(contacts),
    )
    return contacts


def snapshot_from_payload(payload: dict[str, Any]) -> ContactSnapshot:
    """
    Build a snapshot from request fields (contact_username, contact_name, ...).
    Missing strings become "", a missing country code becomes UNKNOWN_COUNTRY_CODE,
    missing language lists become empty.
    """
    return ContactSnapshot(
        username=optional_text(payload.get("contact_username")),
        name=optional_text(payload.get("contact_name")),
        country=optional_text(payload.get("contact_country")),
        country_code=optional_text(payload.get("contact_country_code"), UNKNOWN_COUNTRY_CODE),
        profile_picture_url=optional_text(payload.get("contact_profile_picture_url")) or None,
        native_languages=dedupe_codes(payload.get("contact_native_languages")),
        learning_languages=dedupe_codes(payload.get("contact_learning_languages")),
    )


def record_contact(
    self_wallet: str,
    target_wallet: str,
    snapshot: ContactSnapshot | None = None,
) -> tuple[ContactEdge, bool]:
    """
    Upsert the self_wallet -> target_wallet edge with a fresh snapshot.

    Returns (edge, is_new_contact). Callers use is_new_contact to avoid repeating
    side effects such as notifications for an existing contact.

    Raises:
        ValidationError: target_wallet missing (checked before any store access).
        StoreFailure: the upsert failed.
    """
    self_wallet = require_wallet(self_wallet, "wallet")
    target_wallet = require_wallet(target_wallet, "contact_wallet")
    edge, is_new = repositories.upsert_contact(self_wallet, target_wallet, snapshot or ContactSnapshot())
    logger.info(
        "contact_recorded",
        wallet=short_wallet(self_wallet),
        contact=short_wallet(target_wallet),
        is_new=is_new,
    )
    return edge, is_new
