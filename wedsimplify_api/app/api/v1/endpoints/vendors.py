"""
Vendor directory endpoints for API v1.

Search, detail and availability are public so that the directory can
be browsed before signing in.  Creating and editing the caller's own
listing requires authentication.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from pydantic import ValidationError as PydanticValidationError

from wedsimplify_api.app.core.exceptions import ValidationError
from wedsimplify_api.app.core.security import get_current_user_id, get_optional_user_id
from wedsimplify_api.app.schemas.calendar import AvailabilityRead
from wedsimplify_api.app.schemas.profile import VendorRead, VendorUpdate
from wedsimplify_api.app.schemas.vendor import VendorDetail, VendorFilter
from wedsimplify_api.app.services.calendar_service import CalendarService
from wedsimplify_api.app.services.vendor_service import VendorService


router = APIRouter()


@router.get("", response_model=List[VendorRead])
async def search_vendors(
    category: Optional[str] = Query(None, description="Exact category, e.g. Photography"),
    location: Optional[str] = Query(None, description="Case-insensitive substring of the location"),
    search: Optional[str] = Query(None, description="Matches business name or description"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> List[VendorRead]:
    """Search active vendors, best rated first."""
    try:
        filters = VendorFilter(
            category=category,
            location=location,
            search=search,
            min_price=min_price,
            max_price=max_price,
            limit=limit,
            offset=offset,
        )
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from None
    return await VendorService.search_vendors(filters)


@router.post("", response_model=VendorRead, status_code=status.HTTP_201_CREATED)
async def create_vendor(
    body: Dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user_id),
) -> VendorRead:
    """Create the caller's vendor listing (profile setup with role ``vendor``)."""
    return await VendorService.create_vendor_profile(user_id, body)


@router.put("", response_model=VendorRead)
@router.put("/profile", response_model=VendorRead)
async def update_vendor(
    updates: VendorUpdate,
    user_id: str = Depends(get_current_user_id),
) -> VendorRead:
    """Update the caller's vendor profile; rating fields are read-only."""
    return await VendorService.update_vendor(user_id, updates)


@router.get("/{vendor_id}", response_model=VendorDetail)
async def get_vendor(
    vendor_id: str = Path(..., description="ID of the vendor"),
    viewer_id: Optional[str] = Depends(get_optional_user_id),
) -> VendorDetail:
    """Vendor with active packages and portfolio.

    For signed-in callers ``isSaved`` tells whether the vendor is among
    their saved vendors.
    """
    return await VendorService.get_vendor_detail(vendor_id, viewer_id)


@router.get("/{vendor_id}/availability", response_model=List[AvailabilityRead])
async def get_vendor_availability(
    vendor_id: str = Path(..., description="ID of the vendor"),
    start: Optional[date] = Query(None, description="First day, YYYY-MM-DD"),
    end: Optional[date] = Query(None, description="Last day, YYYY-MM-DD"),
) -> List[AvailabilityRead]:
    await VendorService.get_vendor(vendor_id)
    return await CalendarService.get_availability(vendor_id, start, end)
