"""
Repository layer over users, contacts and user_ratings.

Each function runs in its own session and returns domain records from
backend_lingua.database.models. SQLAlchemy errors surface as StoreFailure;
callers decide whether a failure is fatal or degradable.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backend_lingua.core.exceptions import StoreFailure
from backend_lingua.database.connection import session_scope, store_scope
from backend_lingua.database.models import (
    ContactEdge,
    ContactSnapshot,
    RatingEdge,
    UserRecord,
    dedupe_codes,
)
from backend_lingua.database.tables import Contact, User, UserRating, utcnow
from backend_lingua.lingua_logging import get_logger, short_wallet

logger = get_logger(__name__)

# Profile columns written by a profile save; quality_score is never among them
USER_PROFILE_FIELDS = (
    "username",
    "profile_picture_url",
    "name",
    "country",
    "country_code",
    "native_languages",
    "learning_languages",
    "notifications_enabled",
)


# -----------------------------------------------------------------------------
# Row -> record
# -----------------------------------------------------------------------------


def _user_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        wallet_address=row.wallet_address,
        username=row.username or "",
        name=row.name or "",
        country=row.country or "",
        country_code=row.country_code or "",
        profile_picture_url=row.profile_picture_url,
        native_languages=dedupe_codes(row.native_languages),
        learning_languages=dedupe_codes(row.learning_languages),
        notifications_enabled=bool(row.notifications_enabled),
        quality_score=row.quality_score or 0,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _contact_edge(row: Contact) -> ContactEdge:
    return ContactEdge(
        id=row.id,
        user_wallet=row.user_wallet,
        contact_wallet=row.contact_wallet,
        contact_data=ContactSnapshot.from_json(row.contact_data),
        created_at=row.created_at,
    )


def _rating_edge(row: UserRating) -> RatingEdge:
    return RatingEdge(
        id=row.id,
        rater_wallet=row.rater_wallet,
        rated_wallet=row.rated_wallet,
        rating=int(row.rating),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


def upsert_user(wallet: str, profile: dict[str, Any]) -> UserRecord:
    """
    Insert or update the user row for wallet. Only USER_PROFILE_FIELDS are written.
    Returns the stored record.
    """
    values = {k: profile[k] for k in USER_PROFILE_FIELDS if k in profile}
    with store_scope("user_upsert", wallet=short_wallet(wallet)) as session:
        row = session.query(User).filter(User.wallet_address == wallet).one_or_none()
        if row is None:
            row = User(wallet_address=wallet, quality_score=0, **values)
            session.add(row)
            logger.info("user_created", wallet=short_wallet(wallet))
        else:
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            logger.info("user_updated", wallet=short_wallet(wallet))
        session.flush()
        return _user_record(row)


def get_user(wallet: str) -> UserRecord | None:
    with store_scope("user_get", wallet=short_wallet(wallet)) as session:
        row = session.query(User).filter(User.wallet_address == wallet).one_or_none()
        return _user_record(row) if row else None


def get_users_by_wallets(wallets: Iterable[str]) -> dict[str, UserRecord]:
    """Return wallet -> record for the wallets that have a user row."""
    wanted = sorted({w for w in wallets if w})
    if not wanted:
        return {}
    with store_scope("users_by_wallets", count=len(wanted)) as session:
        rows = session.query(User).filter(User.wallet_address.in_(wanted)).all()
        return {row.wallet_address: _user_record(row) for row in rows}


def list_users(*, exclude_wallet: str | None = None) -> list[UserRecord]:
    """All users, newest first, optionally without one wallet."""
    with store_scope("users_list") as session:
        q = session.query(User)
        if exclude_wallet:
            q = q.filter(User.wallet_address != exclude_wallet)
        rows = q.order_by(User.created_at.desc(), User.id.desc()).all()
        return [_user_record(r) for r in rows]


def set_quality_score(wallet: str, score: int) -> bool:
    """Write the cached quality score. Returns False when the wallet has no user row."""
    with store_scope("quality_score_write", wallet=short_wallet(wallet)) as session:
        updated = (
            session.query(User)
            .filter(User.wallet_address == wallet)
            .update({"quality_score": int(score)}, synchronize_session=False)
        )
        return bool(updated)


# -----------------------------------------------------------------------------
# Contacts
# -----------------------------------------------------------------------------


def list_contacts_initiated(wallet: str) -> list[ContactEdge]:
    """Edges where wallet is the initiator, newest first."""
    with store_scope("contacts_initiated_fetch", wallet=short_wallet(wallet)) as session:
        rows = (
            session.query(Contact)
            .filter(Contact.user_wallet == wallet)
            .order_by(Contact.created_at.desc())
            .all()
        )
        return [_contact_edge(r) for r in rows]


def list_contacts_received(wallet: str) -> list[ContactEdge]:
    """Edges where someone else initiated with wallet as target, newest first."""
    with store_scope("contacts_received_fetch", wallet=short_wallet(wallet)) as session:
        rows = (
            session.query(Contact)
            .filter(Contact.contact_wallet == wallet)
            .order_by(Contact.created_at.desc())
            .all()
        )
        return [_contact_edge(r) for r in rows]


def get_contact(user_wallet: str, contact_wallet: str) -> ContactEdge | None:
    with store_scope("contact_get", wallet=short_wallet(user_wallet)) as session:
        row = (
            session.query(Contact)
            .filter(Contact.user_wallet == user_wallet, Contact.contact_wallet == contact_wallet)
            .one_or_none()
        )
        return _contact_edge(row) if row else None


def upsert_contact(
    user_wallet: str,
    contact_wallet: str,
    snapshot: ContactSnapshot,
    *,
    created_at: datetime | None = None,
) -> tuple[ContactEdge, bool]:
    """
    Insert or update the (user_wallet, contact_wallet) edge; the snapshot fully
    replaces any prior one. created_at applies to new rows only.
    Returns (edge, is_new).
    """
    payload = snapshot.to_json()
    # A concurrent insert of the same pair loses the unique race once; retry as update.
    for attempt in range(2):
        try:
            with session_scope() as session:
                row = (
                    session.query(Contact)
                    .filter(Contact.user_wallet == user_wallet, Contact.contact_wallet == contact_wallet)
                    .one_or_none()
                )
                is_new = row is None
                if is_new:
                    row = Contact(
                        user_wallet=user_wallet,
                        contact_wallet=contact_wallet,
                        contact_data=payload,
                        created_at=created_at or utcnow(),
                    )
                    session.add(row)
                else:
                    row.contact_data = payload
                session.flush()
                return _contact_edge(row), is_new
        except IntegrityError as e:
            if attempt == 0:
                logger.info("contact_upsert_conflict_retry", wallet=short_wallet(user_wallet))
                continue
            logger.exception("contact_upsert_failed", wallet=short_wallet(user_wallet), error=str(e))
            raise StoreFailure("Store error during contact_upsert") from e
        except SQLAlchemyError as e:
            logger.exception("contact_upsert_failed", wallet=short_wallet(user_wallet), error=str(e))
            raise StoreFailure("Store error during contact_upsert") from e
    raise StoreFailure("Store error during contact_upsert")


# -----------------------------------------------------------------------------
# Ratings
# -----------------------------------------------------------------------------


def get_rating(rater_wallet: str, rated_wallet: str) -> RatingEdge | None:
    with store_scope("rating_get", wallet=short_wallet(rater_wallet)) as session:
        row = (
            session.query(UserRating)
            .filter(UserRating.rater_wallet == rater_wallet, UserRating.rated_wallet == rated_wallet)
            .one_or_none()
        )
        return _rating_edge(row) if row else None


def get_ratings_by_rater(rater_wallet: str, rated_wallets: Iterable[str]) -> dict[str, int]:
    """Return rated_wallet -> rating for the pairs that exist."""
    wanted = sorted({w for w in rated_wallets if w})
    if not wanted:
        return {}
    with store_scope("ratings_batch_fetch", wallet=short_wallet(rater_wallet)) as session:
        rows = (
            session.query(UserRating.rated_wallet, UserRating.rating)
            .filter(UserRating.rater_wallet == rater_wallet, UserRating.rated_wallet.in_(wanted))
            .all()
        )
        return {r[0]: int(r[1]) for r in rows}


def insert_rating(rater_wallet: str, rated_wallet: str, rating: int) -> RatingEdge:
    with store_scope("rating_insert", wallet=short_wallet(rater_wallet)) as session:
        row = UserRating(rater_wallet=rater_wallet, rated_wallet=rated_wallet, rating=rating)
        session.add(row)
        session.flush()
        return _rating_edge(row)


def update_rating(rating_id: int, rating: int) -> None:
    with store_scope("rating_update", rating_id=rating_id) as session:
        session.query(UserRating).filter(UserRating.id == rating_id).update(
            {"rating": rating, "updated_at": utcnow()}, synchronize_session=False
        )


def delete_rating(rating_id: int) -> None:
    with store_scope("rating_delete", rating_id=rating_id) as session:
        session.query(UserRating).filter(UserRating.id == rating_id).delete(synchronize_session=False)


def sum_ratings(rated_wallet: str) -> int:
    """Sum of rating over all edges pointing at rated_wallet (0 when none)."""
    with store_scope("ratings_sum", wallet=short_wallet(rated_wallet)) as session:
        total = (
            session.query(func.coalesce(func.sum(UserRating.rating), 0))
            .filter(UserRating.rated_wallet == rated_wallet)
            .scalar()
        )
        return int(total or 0)
