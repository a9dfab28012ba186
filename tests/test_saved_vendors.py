import sqlite3

import pytest

from conftest import vendor_id_of
from wedsimplify_api.app.core.db import get_database_path
from wedsimplify_api.app.services.saved_vendor_service import SavedVendorService


@pytest.fixture
def setup(client, make_user):
    consumer = make_user("couple-1", "couple", coupleName="Alex & Sam")
    vendor = make_user("vendor-1", "vendor")
    return consumer, vendor_id_of(client, vendor)


def saved_count():
    conn = sqlite3.connect(get_database_path())
    try:
        return conn.execute("SELECT COUNT(*) FROM saved_vendors").fetchone()[0]
    finally:
        conn.close()


def test_saving_twice_keeps_one_row(client, setup):
    consumer, vendor_id = setup
    first = client.post("/api/consumer/save-vendor", json={"vendorId": vendor_id}, headers=consumer)
    second = client.post("/api/saved-vendors", json={"vendorId": vendor_id}, headers=consumer)
    assert first.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert saved_count() == 1

    listed = client.get("/api/saved-vendors", headers=consumer).json()
    assert len(listed) == 1
    assert listed[0]["vendor"]["id"] == vendor_id
    assert listed[0]["savedAt"]

    assert client.get(f"/api/vendors/{vendor_id}", headers=consumer).json()["isSaved"] is True


def test_remove_saved_vendor(client, setup):
    consumer, vendor_id = setup
    client.post("/api/saved-vendors", json={"vendorId": vendor_id}, headers=consumer)
    assert client.delete(f"/api/saved-vendors/{vendor_id}", headers=consumer).status_code == 204
    assert client.get("/api/saved-vendors", headers=consumer).json() == []
    assert client.delete(f"/api/saved-vendors/{vendor_id}", headers=consumer).status_code == 404


def test_saving_unknown_vendor_is_not_found(client, setup):
    consumer, _ = setup
    response = client.post("/api/saved-vendors", json={"vendorId": "missing"}, headers=consumer)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_save_vendor_service_is_idempotent(setup):
    _, vendor_id = setup
    first = await SavedVendorService.save_vendor("couple-1", vendor_id)
    second = await SavedVendorService.save_vendor("couple-1", vendor_id)
    assert first.id == second.id
    assert saved_count() == 1
