"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter`` for one domain.  Endpoints only
resolve the caller, parse the payload and delegate to a service; the
routers are aggregated in ``router.py``.
"""
