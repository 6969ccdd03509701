"""
FastAPI router: GET /api/ratings, POST /api/ratings, POST /api/ratings/batch.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from backend_lingua.api_server.auth import current_wallet
from backend_lingua.api_server.schemas import (
    RatingResponse,
    RatingsBatchRequest,
    RatingsBatchResponse,
    SubmitRatingRequest,
    SubmitRatingResponse,
)
from backend_lingua.core.exceptions import ValidationError
from backend_lingua.services import ratings as rating_service

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("", response_model=RatingResponse)
def get_rating(
    rated_wallet: str | None = Query(None, max_length=64),
    wallet: str = Depends(current_wallet),
) -> RatingResponse:
    """The caller's rating for rated_wallet (null when unrated)."""
    if not (rated_wallet or "").strip():
        raise ValidationError("Missing rated_wallet parameter")
    return RatingResponse(rating=rating_service.get_my_rating(wallet, rated_wallet))


@router.post("", response_model=SubmitRatingResponse)
def rate_user(body: SubmitRatingRequest, wallet: str = Depends(current_wallet)) -> SubmitRatingResponse:
    """Thumbs up (1) or down (-1). Repeating the current value removes it."""
    my_rating = rating_service.submit_rating(wallet, body.rated_wallet, body.rating)
    return SubmitRatingResponse(success=True, myRating=my_rating)


@router.post("/batch", response_model=RatingsBatchResponse)
def get_ratings_batch(body: RatingsBatchRequest, wallet: str = Depends(current_wallet)) -> RatingsBatchResponse:
    """The caller's ratings for several wallets; unrated wallets are omitted."""
    return RatingsBatchResponse(ratings=rating_service.get_my_ratings(wallet, body.wallet_addresses))
