"""
Contact endpoints.

All routes require an authenticated caller and operate only on that
caller's contacts.  Errors raised by ``ContactService`` are rendered
by the application-wide handlers in ``main``.
"""

from typing import List

from fastapi import APIRouter, Depends

from contact_keeper_api.app.core.security import AuthContext, get_current_user
from contact_keeper_api.app.schemas.common import Message
from contact_keeper_api.app.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from contact_keeper_api.app.services.contact_service import ContactService

router = APIRouter()


@router.get("", response_model=List[ContactRead])
async def list_contacts(current_user: AuthContext = Depends(get_current_user)) -> List[ContactRead]:
    """Get all of the caller's contacts, most recent first."""
    return await ContactService.list_contacts(current_user)


@router.post("", response_model=ContactRead)
async def create_contact(
    contact_in: ContactCreate,
    current_user: AuthContext = Depends(get_current_user),
) -> ContactRead:
    """Add a contact.  ``name`` is required."""
    return await ContactService.create_contact(current_user, contact_in)


@router.put("/{contact_id}", response_model=ContactRead)
async def update_contact(
    contact_id: int,
    contact_in: ContactUpdate,
    current_user: AuthContext = Depends(get_current_user),
) -> ContactRead:
    """Update the supplied fields of one of the caller's contacts."""
    return await ContactService.update_contact(current_user, contact_id, contact_in)


@router.delete("/{contact_id}", response_model=Message)
async def delete_contact(
    contact_id: int,
    current_user: AuthContext = Depends(get_current_user),
) -> Message:
    msg = await ContactService.delete_contact(current_user, contact_id)
    return Message(msg=msg)
