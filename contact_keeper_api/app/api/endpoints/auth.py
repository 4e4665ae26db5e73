"""
Authentication endpoints: log in and fetch the logged in user.
"""

from fastapi import APIRouter, Depends

from contact_keeper_api.app.core.security import AuthContext, create_user_token, get_current_user
from contact_keeper_api.app.schemas.user import Token, UserLogin, UserRead
from contact_keeper_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=UserRead)
async def get_logged_in_user(current_user: AuthContext = Depends(get_current_user)) -> UserRead:
    """Return the authenticated user's profile (without the password)."""
    return await UserService.get_user_by_id(current_user.user_id)


@router.post("", response_model=Token)
async def login(credentials: UserLogin) -> Token:
    """Authenticate with email and password and return a token."""
    user = await UserService.authenticate(credentials)
    return Token(token=create_user_token(user.id))
