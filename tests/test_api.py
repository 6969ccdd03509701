"""
Pytest tests for the Lingua HTTP API (FastAPI TestClient over a temporary SQLite DB).
"""

from __future__ import annotations

import httpx

from backend_lingua.api_server.users import get_notification_dispatcher, get_picture_resolver
from backend_lingua.config import get_settings
from backend_lingua.services.notifications import NotificationDispatcher
from backend_lingua.services.profile_pictures import ProfilePictureResolver

WALLET_A = "0x1111111111111111111111111111111111111111"
WALLET_B = "0x2222222222222222222222222222222222222222"

PROFILE_BODY = {
    "name": "Ana",
    "country": "Spain",
    "country_code": "ES",
    "native_languages": ["es"],
    "learning_languages": ["en"],
}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_requires_session(client):
    """Every authenticated route answers 401 without a valid bearer token."""
    assert client.get("/api/contacts").status_code == 401
    assert client.post("/api/ratings", json={"rated_wallet": WALLET_B, "rating": 1}).status_code == 401
    bad = {"Authorization": f"Bearer {WALLET_A}.deadbeef"}
    r = client.get("/api/contacts", headers=bad)
    assert r.status_code == 401
    assert r.json() == {"detail": "Unauthorized"}


def test_save_and_search_users(client, auth_headers):
    r = client.post("/api/users", json=PROFILE_BODY, headers=auth_headers(WALLET_A))
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["wallet_address"] == WALLET_A
    assert user["username"] == "user"
    assert user["quality_score"] == 0

    r = client.get("/api/users", params={"language": "en"})
    assert r.status_code == 200
    assert [u["wallet_address"] for u in r.json()["users"]] == [WALLET_A]

    r = client.get("/api/users", params={"language": "en", "exclude": WALLET_A})
    assert r.json()["users"] == []


def test_save_user_errors(client, auth_headers):
    r = client.post("/api/users", json={**PROFILE_BODY, "wallet_address": WALLET_B}, headers=auth_headers(WALLET_A))
    assert r.status_code == 403
    assert r.json()["detail"] == "Wallet address mismatch"

    r = client.post("/api/users", json={"name": "Ana"}, headers=auth_headers(WALLET_A))
    assert r.status_code == 400
    assert "Missing required fields" in r.json()["detail"]

    r = client.get("/api/users", params={"sort": "random"})
    assert r.status_code == 400


def test_contacts_flow(client, auth_headers):
    """POST twice (new then existing), then both sides list one entry each."""
    client.post("/api/users", json=PROFILE_BODY, headers=auth_headers(WALLET_A))
    client.post("/api/users", json={**PROFILE_BODY, "name": "Bruno"}, headers=auth_headers(WALLET_B))

    body = {"contact_wallet": WALLET_B, "contact_name": "Bruno", "contact_native_languages": ["pt"]}
    r1 = client.post("/api/contacts", json=body, headers=auth_headers(WALLET_A))
    assert r1.status_code == 200
    assert r1.json()["isNewContact"] is True
    contact = r1.json()["contact"]
    assert contact["user_wallet"] == WALLET_A
    assert contact["contact_wallet"] == WALLET_B
    assert contact["contact_data"]["countryCode"] == "XX"
    assert contact["contact_data"]["nativeLanguages"] == ["pt"]

    r2 = client.post("/api/contacts", json=body, headers=auth_headers(WALLET_A))
    assert r2.json()["isNewContact"] is False

    r = client.get("/api/contacts", headers=auth_headers(WALLET_A))
    contacts = r.json()["contacts"]
    assert len(contacts) == 1
    assert contacts[0]["contact_wallet"] == WALLET_B
    assert contacts[0]["initiated_by_them"] is False

    r = client.get("/api/contacts", headers=auth_headers(WALLET_B))
    contacts = r.json()["contacts"]
    assert len(contacts) == 1
    assert contacts[0]["contact_wallet"] == WALLET_A
    assert contacts[0]["initiated_by_them"] is True
    assert contacts[0]["contact_data"]["name"] == "Ana"


def test_save_contact_missing_wallet(client, auth_headers):
    r = client.post("/api/contacts", json={"contact_name": "Bruno"}, headers=auth_headers(WALLET_A))
    assert r.status_code == 400
    assert r.json()["detail"] == "Missing required field: contact_wallet"


def test_ratings_flow(client, auth_headers):
    client.post("/api/users", json={**PROFILE_BODY, "name": "Bruno"}, headers=auth_headers(WALLET_B))
    headers = auth_headers(WALLET_A)

    r = client.get("/api/ratings", params={"rated_wallet": WALLET_B}, headers=headers)
    assert r.json() == {"rating": None}

    r = client.post("/api/ratings", json={"rated_wallet": WALLET_B, "rating": 1}, headers=headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "myRating": 1}

    r = client.get("/api/ratings", params={"rated_wallet": WALLET_B}, headers=headers)
    assert r.json() == {"rating": 1}

    r = client.post("/api/ratings/batch", json={"wallet_addresses": [WALLET_B, "0x9999"]}, headers=headers)
    assert r.json() == {"ratings": {WALLET_B: 1}}

    r = client.post("/api/ratings", json={"rated_wallet": WALLET_B, "rating": 1}, headers=headers)
    assert r.json() == {"success": True, "myRating": None}

    users = client.get("/api/users").json()["users"]
    assert users[0]["quality_score"] == 0


def test_ratings_validation(client, auth_headers):
    headers = auth_headers(WALLET_A)
    r = client.post("/api/ratings", json={"rated_wallet": WALLET_A, "rating": 1}, headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Cannot rate yourself"

    r = client.post("/api/ratings", json={"rated_wallet": WALLET_B, "rating": 3}, headers=headers)
    assert r.status_code == 400

    r = client.post("/api/ratings", json={"rated_wallet": WALLET_B, "rating": True}, headers=headers)
    assert r.status_code == 400

    r = client.get("/api/ratings", headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Missing rated_wallet parameter"

    r = client.post("/api/ratings/batch", json={"wallet_addresses": "nope"}, headers=headers)
    assert r.status_code == 400


def test_send_notification(client, auth_headers, monkeypatch):
    monkeypatch.setenv("APP_ID", "app_test")
    client.post("/api/users", json=PROFILE_BODY, headers=auth_headers(WALLET_A))
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200, json={"success": True})

    http = httpx.Client(transport=httpx.MockTransport(handler))
    client.app.dependency_overrides[get_notification_dispatcher] = lambda: NotificationDispatcher(
        get_settings(), client=http
    )

    r = client.post("/api/send-notification", json={"wallet_address": WALLET_B}, headers=auth_headers(WALLET_A))
    assert r.status_code == 200
    assert r.json() == {"success": True, "result": {"success": True}}
    assert len(sent) == 1
    assert b"Ana wants to practice languages" in sent[0].content


def test_send_notification_upstream_error(client, auth_headers, monkeypatch):
    monkeypatch.setenv("APP_ID", "app_test")
    http = httpx.Client(transport=httpx.MockTransport(lambda req: httpx.Response(400, json={"code": "bad"})))
    client.app.dependency_overrides[get_notification_dispatcher] = lambda: NotificationDispatcher(
        get_settings(), client=http
    )
    r = client.post("/api/send-notification", json={"wallet_address": WALLET_B}, headers=auth_headers(WALLET_A))
    assert r.status_code == 400
    assert r.json()["detail"] == "Failed to send notification"
    assert r.json()["details"] == {"code": "bad"}


def test_send_notification_requires_wallet(client, auth_headers, monkeypatch):
    monkeypatch.setenv("APP_ID", "app_test")
    r = client.post("/api/send-notification", json={}, headers=auth_headers(WALLET_A))
    assert r.status_code == 400


def test_profile_picture(client):
    http = httpx.Client(
        transport=httpx.MockTransport(
            lambda req: httpx.Response(200, json={"profile_picture_url": "https://img/ana.png"})
        )
    )
    resolver = ProfilePictureResolver(get_settings(), client=http)
    client.app.dependency_overrides[get_picture_resolver] = lambda: resolver
    r = client.get("/api/users/ana/profile-picture")
    assert r.status_code == 200
    assert r.json() == {"profilePictureUrl": "https://img/ana.png"}
