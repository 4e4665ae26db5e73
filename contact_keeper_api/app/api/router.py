"""
Top-level API router.

Aggregates the domain routers under their resource prefixes.  The
application mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import auth, contacts, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
