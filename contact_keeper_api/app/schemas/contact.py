"""
Pydantic models for contact data.

``ContactCreate`` accepts every field as optional so that a missing
``name`` is reported by the service as a field complaint rather than
rejected by the framework.  ``ContactUpdate`` describes a partial
update: only the fields a client actually supplies are written.
Neither model has a ``user`` field; ownership always comes from the
authenticated caller and a ``user`` key in a request body is dropped.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ContactCreate(BaseModel):
    name: Optional[str] = Field(None, examples=["Jill Johnson"])
    email: Optional[str] = Field(None, examples=["jill@gmail.com"])
    phone: Optional[str] = Field(None, examples=["111-111-1111"])
    type: Optional[str] = Field(None, examples=["personal"], description="Category, e.g. personal or professional")


class ContactUpdate(BaseModel):
    """Sparse update of a contact.  All fields are optional."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    type: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Return the fields to write.

        Fields that are absent, ``null`` or empty strings are left
        untouched on the stored contact.
        """
        return {key: value for key, value in self.model_dump().items() if value}


class ContactRead(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    type: str
    user: int
    date: str

    model_config = {
        "from_attributes": True,
    }
