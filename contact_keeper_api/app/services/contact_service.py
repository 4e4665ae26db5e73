"""
Business logic for contacts.

Every operation takes the caller's ``AuthContext`` and only ever acts
on contacts owned by that user.  Update and delete follow a fixed
order: the contact must exist (``NotFound``), then it must belong to
the caller (``Forbidden``), and only then is it changed.  The owner of
a contact is set from the caller at creation and is never read from
request data.

Lookup and write are two separate store calls.  Two concurrent writers
to the same contact can both pass the ownership check; the store keeps
each write atomic and the later one wins.
"""

import logging
from typing import List

from contact_keeper_api.app.core.errors import FieldError, Forbidden, NotFound, ValidationFailed
from contact_keeper_api.app.core.security import AuthContext
from contact_keeper_api.app.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from contact_keeper_api.app.services.contact_store import ContactStore

logger = logging.getLogger(__name__)

CONTACT_NOT_FOUND = "contact not found"
NOT_AUTHORIZED = "not authorized"
CONTACT_REMOVED = "contact removed"


def validate_contact(data: ContactCreate) -> List[FieldError]:
    """Collect field complaints for a new contact."""
    errors: List[FieldError] = []
    if not data.name:
        errors.append(FieldError(msg="name is required", param="name", value=data.name))
    return errors


class ContactService:
    """Ownership-scoped CRUD over the contact store."""

    @classmethod
    async def list_contacts(cls, current_user: AuthContext) -> List[ContactRead]:
        """Return the caller's contacts, most recently created first."""
        return ContactStore.find_by_owner(current_user.user_id)

    @classmethod
    async def create_contact(cls, current_user: AuthContext, data: ContactCreate) -> ContactRead:
        errors = validate_contact(data)
        if errors:
            raise ValidationFailed(errors)
        contact = ContactStore.insert(current_user.user_id, data.model_dump())
        logger.info("User %s created contact %s", current_user.user_id, contact.id)
        return contact

    @classmethod
    async def update_contact(
        cls,
        current_user: AuthContext,
        contact_id: int,
        data: ContactUpdate,
    ) -> ContactRead:
        """Apply a partial update to one of the caller's contacts.

        An update with no usable fields returns the contact unchanged.
        """
        contact = cls._get_owned(current_user, contact_id, action="update")
        changes = data.changes()
        if not changes:
            return contact
        updated = ContactStore.update_by_id(contact_id, changes)
        if updated is None:
            # deleted by a concurrent request after the ownership check
            raise NotFound(CONTACT_NOT_FOUND)
        logger.info("User %s updated contact %s (%s)", current_user.user_id, contact_id, ", ".join(changes))
        return updated

    @classmethod
    async def delete_contact(cls, current_user: AuthContext, contact_id: int) -> str:
        """Delete one of the caller's contacts and return the acknowledgement text."""
        cls._get_owned(current_user, contact_id, action="delete")
        if not ContactStore.delete_by_id(contact_id):
            raise NotFound(CONTACT_NOT_FOUND)
        logger.info("User %s deleted contact %s", current_user.user_id, contact_id)
        return CONTACT_REMOVED

    @staticmethod
    def _get_owned(current_user: AuthContext, contact_id: int, action: str) -> ContactRead:
        contact = ContactStore.find_by_id(contact_id)
        if contact is None:
            raise NotFound(CONTACT_NOT_FOUND)
        if contact.user != current_user.user_id:
            logger.warning(
                "User %s attempted to %s contact %s owned by user %s",
                current_user.user_id,
                action,
                contact_id,
                contact.user,
            )
            raise Forbidden(NOT_AUTHORIZED)
        return contact
