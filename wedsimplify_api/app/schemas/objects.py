"""
Pydantic models for the object storage handoff.

Uploading a portfolio image takes two calls: ``POST
/api/objects/upload`` returns a presigned URL the browser PUTs the
file to, then ``PUT /api/portfolio-images`` registers the uploaded URL
as a public portfolio item owned by the vendor.
"""

from typing import Optional

from pydantic import AliasChoices, Field

from .base import CamelModel
from .vendor import PortfolioItemRead


class UploadUrlRead(CamelModel):
    # The client library expects the exact key ``uploadURL``.
    upload_url: str = Field(
        ...,
        serialization_alias="uploadURL",
        validation_alias=AliasChoices("uploadURL", "uploadUrl", "upload_url"),
    )
    object_path: str
    expires_at: int


class PortfolioImageCreate(CamelModel):
    image_url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("imageURL", "imageUrl", "image_url"),
    )
    title: Optional[str] = None
    description: Optional[str] = None
    order_index: int = Field(default=0, ge=0)


class PortfolioImageResult(CamelModel):
    object_path: str
    portfolio_item: PortfolioItemRead
