"""
Inquiry endpoints for API v1.

Consumers send inquiries and see the ones they sent; vendors see the
ones they received and answer them.  ``GET /inquiries`` picks the
right list from the caller's role.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.inquiry import InquiryCreate, InquiryRead, InquiryRespond
from wedsimplify_api.app.schemas.user import Role
from wedsimplify_api.app.services.inquiry_service import InquiryService
from wedsimplify_api.app.services.user_service import UserService


router = APIRouter()


@router.post("", response_model=InquiryRead, status_code=status.HTTP_201_CREATED)
async def create_inquiry(
    inquiry: InquiryCreate,
    user_id: str = Depends(get_current_user_id),
) -> InquiryRead:
    """Send an inquiry to a vendor.  The new inquiry is ``pending``."""
    return await InquiryService.create_inquiry(user_id, inquiry)


@router.get("", response_model=List[InquiryRead])
async def list_inquiries(user_id: str = Depends(get_current_user_id)) -> List[InquiryRead]:
    """Received inquiries for vendors, sent inquiries for everyone else."""
    user = await UserService.require_user(user_id)
    if user.role is Role.VENDOR:
        return await InquiryService.list_for_vendor(user_id)
    return await InquiryService.list_for_consumer(user_id)


@router.get("/sent", response_model=List[InquiryRead])
async def list_sent_inquiries(user_id: str = Depends(get_current_user_id)) -> List[InquiryRead]:
    return await InquiryService.list_for_consumer(user_id)


@router.get("/received", response_model=List[InquiryRead])
async def list_received_inquiries(user_id: str = Depends(get_current_user_id)) -> List[InquiryRead]:
    return await InquiryService.list_for_vendor(user_id)


@router.get("/{inquiry_id}", response_model=InquiryRead)
async def get_inquiry(
    inquiry_id: str = Path(..., description="ID of the inquiry"),
    user_id: str = Depends(get_current_user_id),
) -> InquiryRead:
    return await InquiryService.get_inquiry(user_id, inquiry_id)


@router.put("/{inquiry_id}", response_model=InquiryRead)
@router.put("/{inquiry_id}/respond", response_model=InquiryRead)
async def respond_to_inquiry(
    response: InquiryRespond,
    inquiry_id: str = Path(..., description="ID of the inquiry"),
    user_id: str = Depends(get_current_user_id),
) -> InquiryRead:
    """Answer an inquiry sent to the caller's vendor profile.

    ``status`` must be ``responded``, ``accepted`` or ``declined``.
    """
    return await InquiryService.respond_to_inquiry(
        user_id, inquiry_id, response.status, response.vendor_response
    )
