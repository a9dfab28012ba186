"""
Top-level router for version 1 of the API.

Aggregates the domain routers.  ``main`` mounts it under ``/api``.
Routers that define their own full paths (calendar, saved vendors,
profile setup, object storage) are included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import (
    auth,
    budget,
    calendar,
    inquiries,
    notifications,
    objects,
    profiles,
    saved_vendors,
    settings,
    timeline,
    vendor_catalog,
    vendors,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profiles.router, tags=["profiles"])
router.include_router(vendors.router, prefix="/vendors", tags=["vendors"])
router.include_router(vendor_catalog.router, prefix="/vendor", tags=["vendor catalog"])
router.include_router(calendar.router, tags=["calendar"])
router.include_router(inquiries.router, prefix="/inquiries", tags=["inquiries"])
# The client uses both spellings for planning tools, so each router is
# exposed under two prefixes with identical endpoints.
router.include_router(budget.router, prefix="/budget", tags=["budget"])
router.include_router(budget.router, prefix="/budget-items", tags=["budget"])
router.include_router(timeline.router, prefix="/timeline", tags=["timeline"])
router.include_router(timeline.router, prefix="/timeline-items", tags=["timeline"])
router.include_router(saved_vendors.router, tags=["saved vendors"])
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(objects.router, tags=["objects"])
