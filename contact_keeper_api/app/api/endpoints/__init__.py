"""
Endpoint modules, one ``APIRouter`` per resource.

The routers are aggregated in ``api/router.py``.
"""
