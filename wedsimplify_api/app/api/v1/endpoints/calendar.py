"""
Availability calendar endpoints for the signed-in vendor.

The same operations are reachable as ``/vendor/availability`` (used by
the vendor dashboard) and ``/calendar``.  This router defines its full
paths itself and is included without a prefix.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.calendar import AvailabilityRead, AvailabilityUpdate
from wedsimplify_api.app.services.calendar_service import CalendarService
from wedsimplify_api.app.services.profile_service import ProfileService


router = APIRouter()


@router.get("/vendor/availability", response_model=List[AvailabilityRead])
@router.get("/calendar", response_model=List[AvailabilityRead])
async def get_own_availability(
    start: Optional[date] = Query(None, description="First day, YYYY-MM-DD"),
    end: Optional[date] = Query(None, description="Last day, YYYY-MM-DD"),
    user_id: str = Depends(get_current_user_id),
) -> List[AvailabilityRead]:
    vendor = await ProfileService.require_vendor(user_id)
    return await CalendarService.get_availability(vendor.id, start, end)


@router.put("/vendor/availability", response_model=AvailabilityRead)
@router.put("/calendar", response_model=AvailabilityRead)
async def set_availability(
    entry: AvailabilityUpdate,
    user_id: str = Depends(get_current_user_id),
) -> AvailabilityRead:
    """Mark one day available or booked.

    ``date`` may be a plain date or a full timestamp; timestamps are
    reduced to their UTC calendar day.  Writing the same day again
    replaces the earlier entry.
    """
    vendor = await ProfileService.require_vendor(user_id)
    return await CalendarService.set_availability(vendor.id, entry)


@router.get("/calendar/booked", response_model=List[date])
async def list_booked_dates(user_id: str = Depends(get_current_user_id)) -> List[date]:
    vendor = await ProfileService.require_vendor(user_id)
    return await CalendarService.list_booked_dates(vendor.id)
