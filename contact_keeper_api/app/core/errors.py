"""
Error kinds raised by the services and the authorization guard.

Each ``ApiError`` knows the HTTP status it maps to and the JSON body
clients receive.  Services raise them; ``main.create_app`` registers a
single handler that turns them into responses, so endpoint functions
never build error responses themselves.
"""

from typing import Any, Dict, List, Optional

from fastapi import status
from pydantic import BaseModel


class FieldError(BaseModel):
    """A single complaint about one request field."""

    msg: str
    param: str
    location: str = "body"
    value: Optional[Any] = None


class ApiError(Exception):
    """Base class for errors that are reported to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "server error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"msg": self.message}


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "token is not valid"


class ValidationFailed(ApiError):
    """Request body failed one or more field rules.

    Carries every violation found, not just the first one.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    message = "validation failed"

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(e.msg for e in self.errors) or self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"errors": [e.model_dump(exclude_none=True) for e in self.errors]}


class BadRequest(ApiError):
    """A well-formed request that cannot be honoured (duplicate email, bad login)."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "bad request"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "not found"


class Forbidden(ApiError):
    """The resource exists but belongs to another user.

    The status is taken from ``settings.ownership_denied_status`` when
    the error is rendered, so it defaults to 401 for older clients.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "not authorized"


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "server error"
