"""
Top-level package for the Contact Keeper API.

All functionality lives under ``contact_keeper_api.app``; the ASGI
application is ``contact_keeper_api.app.main:app``.
"""

__all__ = []
