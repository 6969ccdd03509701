"""
Request and response bodies for the Lingua API.

Field names follow the JSON the mini-app front end already sends and reads.
Values whose validation is part of a service contract (rating, wallet lists) are
typed loosely here and checked by the service.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ContactData(BaseModel):
    """Frozen profile snapshot stored on a contact."""

    username: str = ""
    name: str = ""
    country: str = ""
    countryCode: str = "XX"
    profilePictureUrl: str | None = None
    nativeLanguages: list[str] = Field(default_factory=list)
    learningLanguages: list[str] = Field(default_factory=list)


class ContactOut(BaseModel):
    id: int | None = None
    contact_wallet: str
    contact_data: ContactData
    created_at: str | None = None
    initiated_by_them: bool = False


class ContactsResponse(BaseModel):
    """GET /api/contacts response."""

    contacts: list[ContactOut] = Field(default_factory=list)


class SaveContactRequest(BaseModel):
    """POST /api/contacts body: target wallet plus profile fields to snapshot."""

    contact_wallet: str | None = Field(None, max_length=64, description="Wallet of the person contacted")
    contact_username: str | None = None
    contact_name: str | None = None
    contact_country: str | None = None
    contact_country_code: str | None = None
    contact_profile_picture_url: str | None = None
    contact_native_languages: list[str] | None = None
    contact_learning_languages: list[str] | None = None


class StoredContact(BaseModel):
    id: int | None = None
    user_wallet: str
    contact_wallet: str
    contact_data: ContactData
    created_at: str | None = None


class SaveContactResponse(BaseModel):
    """POST /api/contacts response."""

    contact: StoredContact
    isNewContact: bool = Field(..., description="False when the contact already existed")


class RatingResponse(BaseModel):
    """GET /api/ratings response."""

    rating: int | None = None


class SubmitRatingRequest(BaseModel):
    rated_wallet: str | None = None
    rating: Any = None


class SubmitRatingResponse(BaseModel):
    success: bool = True
    myRating: int | None = Field(None, description="1, -1, or null when toggled off")


class RatingsBatchRequest(BaseModel):
    wallet_addresses: Any = None


class RatingsBatchResponse(BaseModel):
    ratings: dict[str, int] = Field(default_factory=dict)


class UserOut(BaseModel):
    id: int | None = None
    wallet_address: str
    username: str
    profile_picture_url: str | None = None
    name: str
    country: str
    country_code: str
    native_languages: list[str] = Field(default_factory=list)
    learning_languages: list[str] = Field(default_factory=list)
    notifications_enabled: bool = False
    quality_score: int = 0
    created_at: str | None = None
    updated_at: str | None = None


class UsersResponse(BaseModel):
    users: list[UserOut] = Field(default_factory=list)


class SaveUserRequest(BaseModel):
    """POST /api/users body. wallet_address, when given, must match the session."""

    wallet_address: str | None = None
    username: str | None = None
    profile_picture_url: str | None = None
    name: str | None = None
    country: str | None = None
    country_code: str | None = None
    native_languages: list[str] | None = None
    learning_languages: list[str] | None = None
    notifications_enabled: bool | None = None


class UserResponse(BaseModel):
    user: UserOut


class ProfilePictureResponse(BaseModel):
    profilePictureUrl: str | None = None


class SendNotificationRequest(BaseModel):
    wallet_address: str | None = None


class SendNotificationResponse(BaseModel):
    success: bool = True
    result: Any = None
