"""
Service layer for the vendor directory.

Provides the public search and detail views and the vendor's own
management of its listing: profile fields, priced packages and
portfolio items.  Packages are never hard-deleted; ``delete_package``
clears ``is_active`` so that the package disappears from every
listing while historic references keep resolving.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from wedsimplify_api.app.core.db import (
    assignments,
    get_connection,
    insert_row,
    new_id,
    transaction,
    utcnow,
)
from wedsimplify_api.app.core.exceptions import NotFoundError
from wedsimplify_api.app.schemas.profile import VendorRead, VendorUpdate
from wedsimplify_api.app.schemas.user import Role
from wedsimplify_api.app.schemas.vendor import (
    PackageCreate,
    PackageRead,
    PackageUpdate,
    PortfolioItemRead,
    VendorDetail,
    VendorFilter,
)
from wedsimplify_api.app.services.object_storage_service import ObjectStorageService
from wedsimplify_api.app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _package_from_row(row) -> PackageRead:
    data = dict(row)
    data["features"] = json.loads(data["features"]) if data.get("features") else []
    return PackageRead.model_validate(data)


class VendorService:
    """Service for vendor search, detail and self-management."""

    @classmethod
    async def search_vendors(cls, filters: VendorFilter) -> List[VendorRead]:
        """Search active vendors.

        ``category`` matches exactly; ``location`` is a case-insensitive
        substring; ``search`` matches business name or description.  A
        price bound keeps vendors with at least one active package
        inside the range.  Results are ordered by rating (highest first)
        and then by creation order, and paginated with ``limit`` and
        ``offset``.
        """
        clauses = ["v.is_active = 1"]
        params: List[Any] = []
        if filters.category:
            clauses.append("v.category = ?")
            params.append(filters.category)
        if filters.location:
            clauses.append("LOWER(COALESCE(v.location, '')) LIKE ? ESCAPE '\\'")
            params.append(f"%{escape_like(filters.location.lower())}%")
        if filters.search:
            pattern = f"%{escape_like(filters.search.lower())}%"
            clauses.append(
                "(LOWER(v.business_name) LIKE ? ESCAPE '\\'"
                " OR LOWER(COALESCE(v.description, '')) LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern])
        if filters.min_price is not None or filters.max_price is not None:
            price_clauses = ["p.vendor_id = v.id", "p.is_active = 1"]
            if filters.min_price is not None:
                price_clauses.append("p.price >= ?")
                params.append(filters.min_price)
            if filters.max_price is not None:
                price_clauses.append("p.price <= ?")
                params.append(filters.max_price)
            clauses.append(
                "EXISTS (SELECT 1 FROM vendor_packages p WHERE "
                + " AND ".join(price_clauses)
                + ")"
            )
        query = (
            "SELECT v.* FROM vendors v WHERE "
            + " AND ".join(clauses)
            + " ORDER BY v.rating DESC, v.created_at ASC, v.id ASC LIMIT ? OFFSET ?"
        )
        params.extend([filters.limit, filters.offset])
        conn = get_connection()
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
        return [VendorRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def get_vendor(cls, vendor_id: str) -> VendorRead:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM vendors WHERE id = ?", (vendor_id,)).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Vendor not found")
        return VendorRead.model_validate(dict(row))

    @classmethod
    async def get_vendor_detail(cls, vendor_id: str, viewer_id: Optional[str] = None) -> VendorDetail:
        """Return a vendor with its active packages and portfolio.

        When ``viewer_id`` is given, ``is_saved`` tells whether that user
        has the vendor among their saved vendors.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT * FROM vendors WHERE id = ?", (vendor_id,)).fetchone()
            if row is None:
                raise NotFoundError("Vendor not found")
            packages = cursor.execute(
                "SELECT * FROM vendor_packages WHERE vendor_id = ? AND is_active = 1"
                " ORDER BY price ASC, created_at ASC",
                (vendor_id,),
            ).fetchall()
            portfolio = cursor.execute(
                "SELECT * FROM portfolio_items WHERE vendor_id = ?"
                " ORDER BY order_index ASC, created_at ASC",
                (vendor_id,),
            ).fetchall()
            is_saved = None
            if viewer_id is not None:
                is_saved = cursor.execute(
                    "SELECT 1 FROM saved_vendors WHERE user_id = ? AND vendor_id = ?",
                    (viewer_id, vendor_id),
                ).fetchone() is not None
        finally:
            conn.close()
        return VendorDetail(
            **VendorRead.model_validate(dict(row)).model_dump(),
            packages=[_package_from_row(p) for p in packages],
            portfolio=[PortfolioItemRead.model_validate(dict(p)) for p in portfolio],
            is_saved=is_saved,
        )

    @classmethod
    async def create_vendor_profile(cls, user_id: str, fields: Dict[str, Any]) -> VendorRead:
        """Create the caller's vendor listing; same rules as profile setup."""
        return await ProfileService.complete_profile_setup(user_id, Role.VENDOR, fields)

    @classmethod
    async def update_vendor(cls, user_id: str, updates: VendorUpdate) -> VendorRead:
        """Update the caller's vendor profile.

        ``rating`` and ``review_count`` are not part of ``VendorUpdate``
        and therefore cannot be changed by the vendor.
        """
        vendor = await ProfileService.require_vendor(user_id)
        values = updates.model_dump(exclude_unset=True)
        if not values:
            return vendor
        clause, params = assignments({**values, "updated_at": utcnow()})
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"UPDATE vendors SET {clause} WHERE id = ?", (*params, vendor.id))
            conn.commit()
            row = cursor.execute("SELECT * FROM vendors WHERE id = ?", (vendor.id,)).fetchone()
        finally:
            conn.close()
        logger.info("Vendor %s updated fields %s", vendor.id, sorted(values))
        return VendorRead.model_validate(dict(row))

    # Packages

    @classmethod
    async def list_packages(cls, vendor_id: str) -> List[PackageRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM vendor_packages WHERE vendor_id = ? AND is_active = 1"
                " ORDER BY price ASC, created_at ASC",
                (vendor_id,),
            ).fetchall()
        finally:
            conn.close()
        return [_package_from_row(row) for row in rows]

    @classmethod
    async def create_package(cls, user_id: str, package: PackageCreate) -> PackageRead:
        vendor = await ProfileService.require_vendor(user_id)
        package_id = new_id()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            insert_row(
                cursor,
                "vendor_packages",
                {
                    "id": package_id,
                    "vendor_id": vendor.id,
                    **package.model_dump(),
                    "is_active": True,
                    "created_at": utcnow(),
                },
            )
            conn.commit()
            row = cursor.execute("SELECT * FROM vendor_packages WHERE id = ?", (package_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Vendor %s created package %s", vendor.id, package_id)
        return _package_from_row(row)

    @classmethod
    async def update_package(cls, user_id: str, package_id: str, updates: PackageUpdate) -> PackageRead:
        vendor = await ProfileService.require_vendor(user_id)
        values = updates.model_dump(exclude_unset=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if values:
                clause, params = assignments(values)
                cursor.execute(
                    f"UPDATE vendor_packages SET {clause} WHERE id = ? AND vendor_id = ?",
                    (*params, package_id, vendor.id),
                )
                conn.commit()
            row = cursor.execute(
                "SELECT * FROM vendor_packages WHERE id = ? AND vendor_id = ?",
                (package_id, vendor.id),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Package not found")
        return _package_from_row(row)

    @classmethod
    async def delete_package(cls, user_id: str, package_id: str) -> None:
        """Soft-delete one of the caller's packages."""
        vendor = await ProfileService.require_vendor(user_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE vendor_packages SET is_active = 0 WHERE id = ? AND vendor_id = ?",
                (package_id, vendor.id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Package not found")
            conn.commit()
        finally:
            conn.close()
        logger.info("Vendor %s deactivated package %s", vendor.id, package_id)

    # Portfolio

    @classmethod
    async def list_portfolio(cls, vendor_id: str) -> List[PortfolioItemRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM portfolio_items WHERE vendor_id = ?"
                " ORDER BY order_index ASC, created_at ASC",
                (vendor_id,),
            ).fetchall()
        finally:
            conn.close()
        return [PortfolioItemRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def publish_portfolio_image(
        cls,
        user_id: str,
        image_url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        order_index: int = 0,
    ) -> Tuple[str, PortfolioItemRead]:
        """Make an uploaded image public and add it to the caller's portfolio.

        The ACL and the portfolio row are written in one transaction;
        returns the normalised object path and the new item.
        """
        vendor = await ProfileService.require_vendor(user_id)
        item_id = new_id()
        with transaction() as cursor:
            object_path = ObjectStorageService.apply_acl(cursor, image_url, user_id, "public")
            insert_row(
                cursor,
                "portfolio_items",
                {
                    "id": item_id,
                    "vendor_id": vendor.id,
                    "title": title,
                    "description": description,
                    "image_url": object_path,
                    "order_index": order_index,
                    "created_at": utcnow(),
                },
            )
            row = cursor.execute("SELECT * FROM portfolio_items WHERE id = ?", (item_id,)).fetchone()
        logger.info("Vendor %s added portfolio item %s", vendor.id, item_id)
        return object_path, PortfolioItemRead.model_validate(dict(row))

    @classmethod
    async def delete_portfolio_item(cls, user_id: str, item_id: str) -> None:
        vendor = await ProfileService.require_vendor(user_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM portfolio_items WHERE id = ? AND vendor_id = ?",
                (item_id, vendor.id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Portfolio item not found")
            conn.commit()
        finally:
            conn.close()
        logger.info("Vendor %s removed portfolio item %s", vendor.id, item_id)
