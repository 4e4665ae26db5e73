"""
HTTP layer of the Contact Keeper API.

``router`` in ``router.py`` bundles the endpoint modules under
``endpoints``; each endpoint module defines one ``APIRouter`` for a
resource (users, auth, contacts).
"""
