"""
FastAPI router: GET /api/contacts, POST /api/contacts.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from backend_lingua.api_server.auth import current_wallet
from backend_lingua.api_server.schemas import (
    ContactsResponse,
    SaveContactRequest,
    SaveContactResponse,
)
from backend_lingua.services import contacts as contact_service

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=ContactsResponse)
def get_contacts(wallet: str = Depends(current_wallet)) -> ContactsResponse:
    """
    Contacts the caller initiated plus people who contacted the caller,
    one entry per counterpart, newest first.
    """
    views = contact_service.list_contacts(wallet)
    return ContactsResponse.model_validate({"contacts": [v.to_dict() for v in views]})


@router.post("", response_model=SaveContactResponse)
def save_contact(body: SaveContactRequest, wallet: str = Depends(current_wallet)) -> SaveContactResponse:
    """Record (or refresh) a contact after a chat is started."""
    payload = body.model_dump()
    edge, is_new = contact_service.record_contact(
        wallet,
        payload.get("contact_wallet") or "",
        contact_service.snapshot_from_payload(payload),
    )
    return SaveContactResponse.model_validate({"contact": edge.to_dict(), "isNewContact": is_new})
