"""
Saved vendor endpoints for API v1.

Saving is idempotent: saving a vendor twice returns the row created
the first time.  ``POST /consumer/save-vendor`` is the path used by
the vendor cards of the consumer dashboard.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.saved_vendor import (
    SavedVendorCreate,
    SavedVendorEntry,
    SavedVendorRead,
)
from wedsimplify_api.app.services.saved_vendor_service import SavedVendorService


router = APIRouter()


@router.get("/saved-vendors", response_model=List[SavedVendorEntry])
async def list_saved_vendors(user_id: str = Depends(get_current_user_id)) -> List[SavedVendorEntry]:
    return await SavedVendorService.list_saved_vendors(user_id)


@router.post("/saved-vendors", response_model=SavedVendorRead)
@router.post("/consumer/save-vendor", response_model=SavedVendorRead)
async def save_vendor(
    body: SavedVendorCreate,
    user_id: str = Depends(get_current_user_id),
) -> SavedVendorRead:
    return await SavedVendorService.save_vendor(user_id, body.vendor_id)


@router.delete("/saved-vendors/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_saved_vendor(
    vendor_id: str = Path(..., description="ID of the saved vendor"),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    await SavedVendorService.remove_saved_vendor(user_id, vendor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
