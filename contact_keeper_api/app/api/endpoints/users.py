"""
User registration endpoint.

A successful registration logs the new user straight in by returning
an access token.
"""

from fastapi import APIRouter

from contact_keeper_api.app.core.security import create_user_token
from contact_keeper_api.app.schemas.user import Token, UserCreate
from contact_keeper_api.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=Token)
async def register_user(user_in: UserCreate) -> Token:
    """Register a user and return a token for them."""
    user = await UserService.create_user(user_in)
    return Token(token=create_user_token(user.id))
