"""
Endpoints through which a vendor manages its packages and portfolio.

All routes act on the caller's own vendor profile; a user without one
gets 404 "Vendor profile not found".
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.vendor import (
    PackageCreate,
    PackageRead,
    PackageUpdate,
    PortfolioItemRead,
)
from wedsimplify_api.app.services.profile_service import ProfileService
from wedsimplify_api.app.services.vendor_service import VendorService


router = APIRouter()


@router.get("/packages", response_model=List[PackageRead])
async def list_packages(user_id: str = Depends(get_current_user_id)) -> List[PackageRead]:
    vendor = await ProfileService.require_vendor(user_id)
    return await VendorService.list_packages(vendor.id)


@router.post("/packages", response_model=PackageRead, status_code=status.HTTP_201_CREATED)
async def create_package(
    package: PackageCreate,
    user_id: str = Depends(get_current_user_id),
) -> PackageRead:
    return await VendorService.create_package(user_id, package)


@router.put("/packages/{package_id}", response_model=PackageRead)
async def update_package(
    updates: PackageUpdate,
    package_id: str = Path(..., description="ID of the package"),
    user_id: str = Depends(get_current_user_id),
) -> PackageRead:
    return await VendorService.update_package(user_id, package_id, updates)


@router.delete("/packages/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: str = Path(..., description="ID of the package"),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    """Deactivate a package; it disappears from listings but is not erased."""
    await VendorService.delete_package(user_id, package_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/portfolio", response_model=List[PortfolioItemRead])
async def list_portfolio(user_id: str = Depends(get_current_user_id)) -> List[PortfolioItemRead]:
    vendor = await ProfileService.require_vendor(user_id)
    return await VendorService.list_portfolio(vendor.id)


@router.delete("/portfolio/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_portfolio_item(
    item_id: str = Path(..., description="ID of the portfolio item"),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    await VendorService.delete_portfolio_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
