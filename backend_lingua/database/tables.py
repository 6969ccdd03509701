"""
SQLAlchemy models for the three Lingua tables: users, contacts, user_ratings.

Timestamps are naive UTC datetimes so ordering is identical on SQLite and PostgreSQL.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC now (microsecond precision)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """One row per wallet; created or updated by profile save (upsert by wallet_address)."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_address = Column(String(64), unique=True, nullable=False, index=True)
    username = Column(String(128), nullable=False, default="user")
    profile_picture_url = Column(String(1024), nullable=True)
    name = Column(String(256), nullable=False)
    country = Column(String(128), nullable=False)
    country_code = Column(String(8), nullable=False)
    native_languages = Column(JSON, nullable=False, default=list)
    learning_languages = Column(JSON, nullable=False, default=list)
    notifications_enabled = Column(Boolean, nullable=False, default=False)
    quality_score = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Contact(Base):
    """
    Directed contact edge with a frozen snapshot of the target's profile.
    One row per (user_wallet, contact_wallet); reconnecting replaces the snapshot.
    """

    __tablename__ = "contacts"
    __table_args__ = (
        UniqueConstraint("user_wallet", "contact_wallet", name="uq_contacts_user_contact"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_wallet = Column(String(64), nullable=False, index=True)
    contact_wallet = Column(String(64), nullable=False, index=True)
    contact_data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)


class UserRating(Base):
    """Signed rating from rater_wallet to rated_wallet; at most one per pair."""

    __tablename__ = "user_ratings"
    __table_args__ = (
        UniqueConstraint("rater_wallet", "rated_wallet", name="uq_user_ratings_rater_rated"),
        CheckConstraint("rating IN (1, -1)", name="ck_user_ratings_rating"),
        CheckConstraint("rater_wallet <> rated_wallet", name="ck_user_ratings_not_self"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    rater_wallet = Column(String(64), nullable=False, index=True)
    rated_wallet = Column(String(64), nullable=False, index=True)
    rating = Column(SmallInteger, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
