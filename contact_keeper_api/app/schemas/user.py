"""
Pydantic models for user registration, login and profile data.

Request fields are optional at the schema level; the user service
checks them and reports every violation in one ``errors`` list.  The
password hash is never part of a response model.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    password: Optional[str] = Field(None, examples=["secret123"], description="At least 6 characters")


class UserLogin(BaseModel):
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    password: Optional[str] = None


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    name: str
    email: str
    date: str

    model_config = {
        "from_attributes": True,
    }


class Token(BaseModel):
    token: str