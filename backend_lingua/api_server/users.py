"""
FastAPI router: GET /api/users, POST /api/users, GET /api/users/{username}/profile-picture,
and POST /api/send-notification.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from backend_lingua.api_server.auth import current_wallet
from backend_lingua.api_server.schemas import (
    ProfilePictureResponse,
    SaveUserRequest,
    SendNotificationRequest,
    SendNotificationResponse,
    UserResponse,
    UsersResponse,
)
from backend_lingua.core.exceptions import LinguaError
from backend_lingua.lingua_logging import get_logger, short_wallet
from backend_lingua.services import users as user_service
from backend_lingua.services.notifications import DEFAULT_SENDER_NAME, NotificationDispatcher
from backend_lingua.services.profile_pictures import ProfilePictureResolver

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


def get_picture_resolver(request: Request) -> ProfilePictureResolver:
    """Dependency: app-scoped resolver so the picture cache outlives a request."""
    resolver = getattr(request.app.state, "picture_resolver", None)
    if resolver is None:
        resolver = ProfilePictureResolver()
        request.app.state.picture_resolver = resolver
    return resolver


def get_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher()


@router.get("/users", response_model=UsersResponse)
def list_users(
    language: str | None = Query(None, max_length=16, description="Language code to match"),
    exclude: str | None = Query(None, max_length=64, description="Wallet to leave out"),
    sort: str = Query(user_service.SORT_BEST, description="best | newest"),
) -> UsersResponse:
    """Partner search: users who speak or learn `language`."""
    users = user_service.search_users(language=language, exclude_wallet=exclude, sort=sort)
    return UsersResponse.model_validate({"users": [u.to_dict() for u in users]})


@router.post("/users", response_model=UserResponse)
def save_user(body: SaveUserRequest, wallet: str = Depends(current_wallet)) -> UserResponse:
    """Create or update the caller's profile (onboarding and profile edits)."""
    user = user_service.save_profile(wallet, body.model_dump())
    return UserResponse.model_validate({"user": user.to_dict()})


@router.get("/users/{username}/profile-picture", response_model=ProfilePictureResponse)
def get_profile_picture(
    username: str,
    resolver: ProfilePictureResolver = Depends(get_picture_resolver),
) -> ProfilePictureResponse:
    return ProfilePictureResponse(profilePictureUrl=resolver.fetch(username))


@router.post("/send-notification", response_model=SendNotificationResponse)
def send_notification(
    body: SendNotificationRequest,
    wallet: str = Depends(current_wallet),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> SendNotificationResponse:
    """Tell another user that the caller wants to chat."""
    sender_name = DEFAULT_SENDER_NAME
    try:
        sender = user_service.get_profile(wallet)
        sender_name = sender.name or sender.username or DEFAULT_SENDER_NAME
    except LinguaError as e:
        logger.debug("notification_sender_unresolved", wallet=short_wallet(wallet), error=e.message)
    result = dispatcher.send_chat_request(sender_name, body.wallet_address or "")
    return SendNotificationResponse(success=True, result=result)
