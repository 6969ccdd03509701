"""
Pytest tests for user profiles (services.users) and profile views.
"""

from __future__ import annotations

import pytest

from backend_lingua.core.exceptions import Forbidden, NotFound, ValidationError
from backend_lingua.database import ContactEdge, ContactSnapshot, repositories
from backend_lingua.services import users as svc
from backend_lingua.services.profiles import profile_from_contact, profile_from_user
from backend_lingua.services.ratings import submit_rating

WALLET_A = "0x1111111111111111111111111111111111111111"
WALLET_B = "0x2222222222222222222222222222222222222222"
WALLET_C = "0x3333333333333333333333333333333333333333"

PROFILE = {
    "name": "Ana",
    "country": "Spain",
    "country_code": "ES",
    "native_languages": ["es", "ca"],
    "learning_languages": ["en"],
}


def test_save_profile_defaults(lingua_db):
    user = svc.save_profile(WALLET_A, dict(PROFILE))
    assert user.wallet_address == WALLET_A
    assert user.username == "user"
    assert user.profile_picture_url is None
    assert user.notifications_enabled is False
    assert user.quality_score == 0
    assert user.native_languages == ["es", "ca"]
    assert user.created_at is not None


def test_save_profile_updates_existing(lingua_db):
    first = svc.save_profile(WALLET_A, dict(PROFILE))
    second = svc.save_profile(WALLET_A, {**PROFILE, "name": "Ana María", "notifications_enabled": True})
    assert second.id == first.id
    assert second.name == "Ana María"
    assert second.notifications_enabled is True
    assert len(repositories.list_users()) == 1


def test_save_profile_wallet_mismatch(lingua_db):
    with pytest.raises(Forbidden, match="mismatch"):
        svc.save_profile(WALLET_A, {**PROFILE, "wallet_address": WALLET_B})
    assert repositories.get_user(WALLET_B) is None
    assert repositories.get_user(WALLET_A) is None


def test_save_profile_matching_wallet_allowed(lingua_db):
    user = svc.save_profile(WALLET_A, {**PROFILE, "wallet_address": WALLET_A})
    assert user.wallet_address == WALLET_A


@pytest.mark.parametrize("missing", ["name", "country", "country_code"])
def test_save_profile_required_fields(lingua_db, missing):
    payload = dict(PROFILE)
    payload.pop(missing)
    with pytest.raises(ValidationError, match="Missing required fields"):
        svc.save_profile(WALLET_A, payload)
    assert repositories.get_user(WALLET_A) is None


def test_get_profile_not_found(lingua_db):
    with pytest.raises(NotFound):
        svc.get_profile(WALLET_A)


def test_search_by_language_and_exclude(lingua_db, make_user):
    make_user(WALLET_A, name="Ana", native_languages=["es"], learning_languages=["en"])
    make_user(WALLET_B, name="Bob", native_languages=["en"], learning_languages=["fr"])
    make_user(WALLET_C, name="Chen", native_languages=["zh"], learning_languages=["ja"])

    english = svc.search_users(language="en")
    assert {u.wallet_address for u in english} == {WALLET_A, WALLET_B}

    english_not_me = svc.search_users(language="en", exclude_wallet=WALLET_A)
    assert [u.wallet_address for u in english_not_me] == [WALLET_B]

    assert len(svc.search_users()) == 3


def test_search_sort_newest_and_best(lingua_db, make_user):
    make_user(WALLET_A, name="Ana")
    make_user(WALLET_B, name="Bob")
    make_user(WALLET_C, name="Chen")
    submit_rating(WALLET_B, WALLET_A, 1)
    submit_rating(WALLET_C, WALLET_A, 1)
    submit_rating(WALLET_A, WALLET_C, -1)

    newest = svc.search_users(sort="newest")
    assert [u.wallet_address for u in newest] == [WALLET_C, WALLET_B, WALLET_A]

    best = svc.search_users(sort="best")
    assert [u.wallet_address for u in best] == [WALLET_A, WALLET_B, WALLET_C]
    assert [u.quality_score for u in best] == [2, 0, -1]


def test_search_invalid_sort(lingua_db):
    with pytest.raises(ValidationError, match="sort"):
        svc.search_users(sort="random")


def test_profile_views_share_interface(lingua_db, make_user):
    user = make_user(WALLET_B, name="Bob", native_languages=["en"], learning_languages=["de"])
    live = profile_from_user(user)
    edge = ContactEdge(
        id=1,
        user_wallet=WALLET_A,
        contact_wallet=WALLET_B,
        contact_data=ContactSnapshot(name="Bobby", native_languages=["en"]),
        created_at=user.created_at,
    )
    frozen = profile_from_contact(edge)

    assert live.source == "live"
    assert frozen.source == "snapshot"
    assert live.wallet_address == frozen.wallet_address == WALLET_B
    assert live.speaks("de") is True
    assert frozen.speaks("de") is False
    assert frozen.to_dict()["countryCode"] == "XX"
    assert live.to_dict()["qualityScore"] == 0
