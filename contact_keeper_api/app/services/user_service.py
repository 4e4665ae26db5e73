"""
Business logic for users.

Registration and login validate their input here and report every
problem at once as field complaints.  Passwords are hashed with
``core.security.hash_password`` before they reach the database and are
never returned.
"""

import logging
import re
import sqlite3
from typing import List, Optional

from contact_keeper_api.app.core.db import is_row_id, store_cursor
from contact_keeper_api.app.core.errors import BadRequest, FieldError, NotFound, ValidationFailed
from contact_keeper_api.app.core.security import hash_password, verify_password
from contact_keeper_api.app.schemas.user import UserCreate, UserLogin, UserRead

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

USER_EXISTS = "user already exists"
INVALID_CREDENTIALS = "invalid credentials"
USER_NOT_FOUND = "user not found"


def _is_email(value: Optional[str]) -> bool:
    return bool(value) and _EMAIL_RE.match(value) is not None


def validate_registration(data: UserCreate) -> List[FieldError]:
    errors: List[FieldError] = []
    if not data.name:
        errors.append(FieldError(msg="name is required", param="name", value=data.name))
    if not _is_email(data.email):
        errors.append(FieldError(msg="please include a valid email", param="email", value=data.email))
    if not data.password or len(data.password) < MIN_PASSWORD_LENGTH:
        # the password itself is never echoed back
        errors.append(
            FieldError(
                msg=f"please enter a password with {MIN_PASSWORD_LENGTH} or more characters",
                param="password",
            )
        )
    return errors


def validate_login(data: UserLogin) -> List[FieldError]:
    errors: List[FieldError] = []
    if not _is_email(data.email):
        errors.append(FieldError(msg="please include a valid email", param="email", value=data.email))
    if not data.password:
        errors.append(FieldError(msg="password is required", param="password"))
    return errors


class UserService:
    """Registration, credential checks and profile lookup."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a new user.

        Raises ``ValidationFailed`` for bad input and ``BadRequest`` if
        the email is already taken.
        """
        errors = validate_registration(data)
        if errors:
            raise ValidationFailed(errors)
        email = data.email.lower()
        with store_cursor("users.create") as cursor:
            existing = cursor.execute("SELECT id FROM users WHERE email = ?", (email,)).fetchone()
            if existing:
                raise BadRequest(USER_EXISTS)
            try:
                cursor.execute(
                    "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                    (data.name, email, hash_password(data.password)),
                )
            except sqlite3.IntegrityError:
                # lost a race with a concurrent registration of the same email
                raise BadRequest(USER_EXISTS)
            row = cursor.execute(
                "SELECT id, name, email, date FROM users WHERE id = ?",
                (cursor.lastrowid,),
            ).fetchone()
        logger.info("Registered user %s (%s)", row["id"], email)
        return cls._row_to_user(row)

    @classmethod
    async def authenticate(cls, data: UserLogin) -> UserRead:
        """Check an email/password pair and return the matching user.

        Unknown emails and wrong passwords produce the same error.
        """
        errors = validate_login(data)
        if errors:
            raise ValidationFailed(errors)
        email = data.email.lower()
        with store_cursor("users.authenticate") as cursor:
            row = cursor.execute(
                "SELECT id, name, email, password, date FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if not row or not verify_password(data.password, row["password"]):
            logger.warning("Failed login for %s", email)
            raise BadRequest(INVALID_CREDENTIALS)
        return cls._row_to_user(row)

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> UserRead:
        if not is_row_id(user_id):
            raise NotFound(USER_NOT_FOUND)
        with store_cursor("users.get_by_id") as cursor:
            row = cursor.execute(
                "SELECT id, name, email, date FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if not row:
            raise NotFound(USER_NOT_FOUND)
        return cls._row_to_user(row)

    @classmethod
    def get_user_id_by_email(cls, email: str) -> Optional[int]:
        """Return the id for ``email`` or ``None``; used by the CLI scripts."""
        with store_cursor("users.get_id_by_email") as cursor:
            row = cursor.execute("SELECT id FROM users WHERE email = ?", (email.lower(),)).fetchone()
        return row["id"] if row else None

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> UserRead:
        return UserRead(id=row["id"], name=row["name"], email=row["email"], date=row["date"])
