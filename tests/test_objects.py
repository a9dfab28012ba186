import asyncio
import sqlite3
from urllib.parse import parse_qs, urlsplit

import pytest

from wedsimplify_api.app.core.config import settings
from wedsimplify_api.app.core.db import get_database_path
from wedsimplify_api.app.core.exceptions import ForbiddenError, NotFoundError
from wedsimplify_api.app.core.security import verify_text
from wedsimplify_api.app.services import vendor_service
from wedsimplify_api.app.services.object_storage_service import ObjectStorageService
from wedsimplify_api.app.services.user_service import UserService
from wedsimplify_api.app.services.vendor_service import VendorService


def test_upload_url_is_presigned(client, login):
    headers = login("vendor-1")
    response = client.post("/api/objects/upload", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["objectPath"].startswith("/objects/uploads/")

    url = urlsplit(body["uploadURL"])
    assert body["uploadURL"].startswith(settings.object_storage_url)
    query = parse_qs(url.query)
    assert query["X-Method"] == ["PUT"]
    assert int(query["X-Expires"][0]) == body["expiresAt"]
    bucket_path = body["objectPath"][len("/objects"):]
    assert verify_text(f"PUT\n{bucket_path}\n{body['expiresAt']}", query["X-Signature"][0])


def test_portfolio_image_flow(client, make_user, login):
    vendor = make_user("vendor-1", "vendor")
    upload = client.post("/api/objects/upload", headers=vendor).json()

    response = client.put(
        "/api/portfolio-images",
        json={"imageURL": upload["uploadURL"], "title": "First dance", "orderIndex": 2},
        headers=vendor,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["objectPath"] == upload["objectPath"]
    assert body["portfolioItem"]["imageUrl"] == upload["objectPath"]
    assert body["portfolioItem"]["orderIndex"] == 2

    portfolio = client.get("/api/vendor/portfolio", headers=vendor).json()
    assert [item["title"] for item in portfolio] == ["First dance"]

    viewer = login("viewer-1")
    download = client.get(upload["objectPath"], headers=viewer, follow_redirects=False)
    assert download.status_code == 307
    assert "X-Method=GET" in download.headers["location"]

    item_id = portfolio[0]["id"]
    assert client.delete(f"/api/vendor/portfolio/{item_id}", headers=vendor).status_code == 204
    assert client.get("/api/vendor/portfolio", headers=vendor).json() == []


def test_portfolio_image_requires_url_and_vendor(client, make_user):
    couple = make_user("couple-1", "couple", coupleName="Alex & Sam")
    assert client.put("/api/portfolio-images", json={"title": "x"}, headers=couple).status_code == 422
    response = client.put(
        "/api/portfolio-images", json={"imageURL": "/objects/uploads/abc"}, headers=couple
    )
    assert response.status_code == 404


def test_portfolio_is_ordered_by_order_index(client, make_user):
    vendor = make_user("vendor-1", "vendor")
    for title, index in (("Third", 3), ("First", 1), ("Second", 2)):
        client.put(
            "/api/portfolio-images",
            json={"imageURL": f"https://cdn.example.com/{title}.jpg", "title": title, "orderIndex": index},
            headers=vendor,
        )
    portfolio = client.get("/api/vendor/portfolio", headers=vendor).json()
    assert [item["title"] for item in portfolio] == ["First", "Second", "Third"]
    assert portfolio[0]["imageUrl"] == "https://cdn.example.com/First.jpg"


def test_normalize_object_path():
    base = settings.object_storage_url.rstrip("/")
    assert ObjectStorageService.normalize_object_path(f"{base}/uploads/abc?X-Signature=1") == "/objects/uploads/abc"
    assert ObjectStorageService.normalize_object_path("/objects/uploads/abc?x=1") == "/objects/uploads/abc"
    assert ObjectStorageService.normalize_object_path("https://elsewhere.example/a.jpg") == "https://elsewhere.example/a.jpg"


@pytest.mark.asyncio
async def test_private_objects_are_owner_only():
    await UserService.upsert_user({"sub": "owner", "email": "owner@example.com"})
    await UserService.upsert_user({"sub": "intruder", "email": "intruder@example.com"})
    path = await ObjectStorageService.set_acl_policy("/objects/uploads/secret", "owner")

    assert await ObjectStorageService.can_access(path, "owner") is True
    assert await ObjectStorageService.can_access(path, "intruder") is False
    with pytest.raises(ForbiddenError):
        await ObjectStorageService.set_acl_policy(path, "intruder", "public")
    with pytest.raises(NotFoundError):
        await ObjectStorageService.can_access("/objects/uploads/unknown", "owner")


def test_private_object_download_is_forbidden(client, login):
    login("owner")
    intruder = login("intruder")
    conn = sqlite3.connect(get_database_path())
    try:
        conn.execute(
            "INSERT INTO object_acls (object_path, owner_id, visibility, created_at)"
            " VALUES ('/objects/uploads/secret', 'owner', 'private', '2025-01-01T00:00:00+00:00')"
        )
        conn.commit()
    finally:
        conn.close()

    response = client.get("/objects/uploads/secret", headers=intruder, follow_redirects=False)
    assert response.status_code == 403
    assert client.get("/objects/uploads/unknown", headers=intruder).status_code == 404


def acl_count():
    conn = sqlite3.connect(get_database_path())
    try:
        return conn.execute("SELECT COUNT(*) FROM object_acls").fetchone()[0]
    finally:
        conn.close()


def test_failed_portfolio_insert_leaves_no_acl(client, make_user, monkeypatch):
    make_user("vendor-1", "vendor")
    upload = ObjectStorageService.get_upload_url()

    def failing_insert(cursor, table, values):
        raise sqlite3.IntegrityError("portfolio insert failed")

    with monkeypatch.context() as patched:
        patched.setattr(vendor_service, "insert_row", failing_insert)
        with pytest.raises(sqlite3.IntegrityError):
            asyncio.run(VendorService.publish_portfolio_image("vendor-1", upload.upload_url))
    assert acl_count() == 0

    object_path, item = asyncio.run(VendorService.publish_portfolio_image("vendor-1", upload.upload_url))
    assert item.image_url == object_path == upload.object_path
    assert acl_count() == 1
