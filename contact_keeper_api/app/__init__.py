"""
Application package for the Contact Keeper API.

``core`` holds configuration, logging, persistence, errors and
security; ``schemas`` the request/response models; ``services`` the
business logic; and ``api`` the routers.  ``main`` assembles them.
"""

from .main import app  # noqa: F401
