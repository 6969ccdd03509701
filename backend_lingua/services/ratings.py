"""
Rating aggregation: one signed rating per (rater, rated) pair with toggle-off.

Per pair the states are UNRATED, POSITIVE and NEGATIVE. Submitting the current
value again removes the rating; submitting the other value flips it. After every
successful transition the rated user's quality_score is recomputed from all
ratings against them (not incrementally).

The read -> decide -> write sequence is not wrapped in a transaction; two
concurrent submissions for the same pair can interleave.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from backend_lingua.core.exceptions import StoreFailure, ValidationError
from backend_lingua.database import repositories
from backend_lingua.lingua_logging import bind_wallet, get_logger, short_wallet
from backend_lingua.services.validation import require_wallet

logger = get_logger(__name__)

THUMBS_UP = 1
THUMBS_DOWN = -1
VALID_RATINGS = (THUMBS_UP, THUMBS_DOWN)


class RatingState(str, Enum):
    UNRATED = "unrated"
    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def of(cls, value: int | None) -> "RatingState":
        if value is None:
            return cls.UNRATED
        return cls.POSITIVE if value == THUMBS_UP else cls.NEGATIVE


class RatingAction(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Transition:
    action: RatingAction
    result: int | None

    @property
    def state(self) -> RatingState:
        return RatingState.of(self.result)


def plan_transition(current: int | None, submitted: int) -> Transition:
    """
    UNRATED + v -> insert v; same v again -> delete (UNRATED); other value -> update.
    """
    if current is None:
        return Transition(RatingAction.INSERT, submitted)
    if current == submitted:
        return Transition(RatingAction.DELETE, None)
    return Transition(RatingAction.UPDATE, submitted)


def validate_rating_value(value: Any) -> int:
    """Accept exactly 1 or -1 (ints only; bools and floats are rejected)."""
    if isinstance(value, bool) or not isinstance(value, int) or value not in VALID_RATINGS:
        raise ValidationError("Invalid request. Need rated_wallet and rating (1 or -1)")
    return value


def recompute_quality_score(rated_wallet: str) -> int:
    """Sum every rating against rated_wallet and write it to users.quality_score."""
    score = repositories.sum_ratings(rated_wallet)
    if not repositories.set_quality_score(rated_wallet, score):
        logger.debug("quality_score_no_user_row", wallet=short_wallet(rated_wallet), score=score)
    return score


def submit_rating(rater_wallet: str, rated_wallet: str, value: Any) -> int | None:
    """
    Apply a rating submission and return the rater's resulting rating (None if toggled off).

    Raises:
        ValidationError: bad value, missing rated_wallet, or self-rating (before any store access).
        StoreFailure: the lookup or the insert/update/delete failed; the score is then not recomputed.
    """
    rater_wallet = require_wallet(rater_wallet, "wallet")
    if not isinstance(rated_wallet, str) or not rated_wallet.strip():
        raise ValidationError("Invalid request. Need rated_wallet and rating (1 or -1)")
    rated_wallet = require_wallet(rated_wallet, "rated_wallet")
    value = validate_rating_value(value)
    if rater_wallet == rated_wallet:
        raise ValidationError("Cannot rate yourself")

    existing = repositories.get_rating(rater_wallet, rated_wallet)
    transition = plan_transition(existing.rating if existing else None, value)
    if transition.action is RatingAction.INSERT:
        repositories.insert_rating(rater_wallet, rated_wallet, value)
    elif transition.action is RatingAction.UPDATE:
        repositories.update_rating(existing.id, value)
    else:
        repositories.delete_rating(existing.id)

    log = bind_wallet(rater_wallet, __name__).bind(rated=short_wallet(rated_wallet))
    try:
        score = recompute_quality_score(rated_wallet)
    except StoreFailure as e:
        # Rating is committed; the cached score catches up on the next submission.
        log.warning("quality_score_recompute_failed", error=str(e))
        score = None
    log.info(
        "rating_submitted",
        action=transition.action.value,
        state=transition.state.value,
        quality_score=score,
    )
    return transition.result


def get_my_rating(rater_wallet: str, rated_wallet: str) -> int | None:
    """The rater's current rating for rated_wallet, or None."""
    rater_wallet = require_wallet(rater_wallet, "wallet")
    rated_wallet = require_wallet(rated_wallet, "rated_wallet")
    existing = repositories.get_rating(rater_wallet, rated_wallet)
    return existing.rating if existing else None


def get_my_ratings(rater_wallet: str, rated_wallets: Any) -> dict[str, int]:
    """rated_wallet -> rating for each listed wallet the rater has rated; unrated wallets are omitted."""
    rater_wallet = require_wallet(rater_wallet, "wallet")
    if not isinstance(rated_wallets, (list, tuple)):
        raise ValidationError("Invalid request. Need wallet_addresses array")
    wallets = [w.strip() for w in rated_wallets if isinstance(w, str) and w.strip()]
    return repositories.get_ratings_by_rater(rater_wallet, wallets)
