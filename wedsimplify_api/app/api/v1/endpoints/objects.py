"""
Object storage endpoints.

``router`` is mounted under ``/api`` and covers the upload handoff.
``files_router`` is mounted at the application root and serves
``/objects/<path>`` by redirecting to a short-lived presigned download
URL once the caller's read access has been checked.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from wedsimplify_api.app.core.exceptions import ForbiddenError
from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.objects import (
    PortfolioImageCreate,
    PortfolioImageResult,
    UploadUrlRead,
)
from wedsimplify_api.app.services.object_storage_service import OBJECT_PREFIX, ObjectStorageService
from wedsimplify_api.app.services.vendor_service import VendorService


router = APIRouter()
files_router = APIRouter()


@router.post("/objects/upload", response_model=UploadUrlRead)
async def request_upload_url(user_id: str = Depends(get_current_user_id)) -> UploadUrlRead:
    """Return a presigned URL the browser can PUT an image to."""
    return ObjectStorageService.get_upload_url()


@router.put("/portfolio-images", response_model=PortfolioImageResult)
async def add_portfolio_image(
    body: PortfolioImageCreate,
    user_id: str = Depends(get_current_user_id),
) -> PortfolioImageResult:
    """Publish an uploaded image in the caller's portfolio.

    The object becomes publicly readable and owned by the caller; the
    new portfolio item stores the normalised ``/objects/...`` path.
    """
    object_path, item = await VendorService.publish_portfolio_image(
        user_id,
        body.image_url,
        title=body.title,
        description=body.description,
        order_index=body.order_index,
    )
    return PortfolioImageResult(object_path=object_path, portfolio_item=item)


@files_router.get("/objects/{object_path:path}", status_code=status.HTTP_307_TEMPORARY_REDIRECT)
async def download_object(
    object_path: str,
    user_id: str = Depends(get_current_user_id),
) -> RedirectResponse:
    entity_path = f"{OBJECT_PREFIX}/{object_path}"
    if not await ObjectStorageService.can_access(entity_path, user_id):
        raise ForbiddenError("You do not have access to this object")
    return RedirectResponse(
        ObjectStorageService.get_download_url(entity_path),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
