"""
Database layer — users, contact edges, rating edges.

SQLAlchemy-backed; PostgreSQL via DATABASE_URL, SQLite otherwise.
"""

from backend_lingua.database.connection import (
    init_db,
    reset_engine_for_test,
    session_scope,
)
from backend_lingua.database.models import (
    UNKNOWN_COUNTRY_CODE,
    ContactEdge,
    ContactSnapshot,
    RatingEdge,
    UserRecord,
)

__all__ = [
    "init_db",
    "reset_engine_for_test",
    "session_scope",
    "UNKNOWN_COUNTRY_CODE",
    "ContactEdge",
    "ContactSnapshot",
    "RatingEdge",
    "UserRecord",
]
