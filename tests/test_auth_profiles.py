import sqlite3

import pytest

from conftest import headers_for
from wedsimplify_api.app.core.db import get_database_path
from wedsimplify_api.app.core.exceptions import ConflictError, InvalidRoleError, NotFoundError
from wedsimplify_api.app.schemas.profile import CoupleRead, VendorRead
from wedsimplify_api.app.services.profile_service import ProfileService
from wedsimplify_api.app.services.user_service import UserService


def test_requests_without_token_are_rejected(client):
    response = client.get("/api/auth/user")
    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get("/api/auth/user", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


def test_login_creates_user_without_role_data(client):
    response = client.post("/api/auth/login", headers=headers_for("user-1"))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "user-1"
    assert body["email"] == "user-1@example.com"
    assert body["firstName"] == "Alex"
    assert body["roleData"] is None


def test_couple_setup_populates_role_data(client, login):
    headers = login("user-1")
    assert client.get("/api/auth/user", headers=headers).json()["roleData"] is None

    response = client.post(
        "/api/setup-profile",
        json={"role": "couple", "coupleName": "Alex & Sam", "email": "a@x.com"},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["success"] is True

    body = client.get("/api/auth/user", headers=headers).json()
    assert body["role"] == "couple"
    assert body["roleData"]["coupleName"] == "Alex & Sam"
    assert body["roleData"]["contactEmail"] == "a@x.com"
    assert body["roleData"]["partnerName"] is None


def test_consumer_name_defaults_to_user_name(client, login):
    headers = login("user-2", first_name="Jamie", last_name="Lee")
    response = client.post("/api/setup-profile", json={"role": "individual"}, headers=headers)
    assert response.status_code == 201
    assert response.json()["profile"]["fullName"] == "Jamie Lee"


def test_vendor_setup_defaults_location(client, make_user):
    headers = make_user("vendor-1", "vendor")
    role_data = client.get("/api/auth/user", headers=headers).json()["roleData"]
    assert role_data["businessName"] == "Luma Photography"
    assert role_data["location"] == "San Diego, CA, USA"
    assert role_data["isActive"] is True
    assert role_data["rating"] == 0


def test_vendor_setup_requires_business_fields(client, login):
    headers = login("vendor-2")
    response = client.post(
        "/api/setup-profile", json={"role": "vendor", "businessName": "Only a name"}, headers=headers
    )
    assert response.status_code == 422
    assert "message" in response.json()
    assert client.get("/api/auth/user", headers=headers).json()["roleData"] is None


def test_unknown_role_is_rejected(client, login):
    headers = login("user-3")
    response = client.post("/api/setup-profile", json={"role": "planner"}, headers=headers)
    assert response.status_code == 400
    assert "Invalid role" in response.json()["message"]


def test_second_setup_conflicts(client, make_user):
    headers = make_user("user-4", "couple", coupleName="First")
    response = client.post(
        "/api/setup-profile", json={"role": "vendor", "businessName": "X"}, headers=headers
    )
    assert response.status_code == 409
    body = client.get("/api/auth/user", headers=headers).json()
    assert body["role"] == "couple"
    assert body["roleData"]["coupleName"] == "First"


def test_login_again_keeps_role(client, make_user):
    headers = make_user("vendor-3", "vendor")
    response = client.post("/api/auth/login", headers=headers_for("vendor-3", first_name="Renamed"))
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "vendor"
    assert body["firstName"] == "Renamed"
    assert body["roleData"]["businessName"] == "Luma Photography"


def test_update_profile(client, make_user):
    headers = make_user("user-5", "couple", coupleName="Alex & Sam")
    response = client.put(
        "/api/profile", json={"partnerName": "Sam", "guestCount": 120}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["partnerName"] == "Sam"
    assert response.json()["guestCount"] == 120
    assert response.json()["coupleName"] == "Alex & Sam"


def test_update_profile_before_setup_is_not_found(client, login):
    headers = login("user-6")
    response = client.put("/api/profile", json={"partnerName": "Sam"}, headers=headers)
    assert response.status_code == 404


def test_delete_account_cascades(client, make_user):
    headers = make_user("user-7", "couple", coupleName="Gone Soon")
    client.post("/api/budget", json={"category": "Venue", "description": "Deposit"}, headers=headers)

    response = client.delete("/api/auth/user", headers=headers)
    assert response.status_code == 204

    conn = sqlite3.connect(get_database_path())
    try:
        assert conn.execute("SELECT COUNT(*) FROM couples").fetchone()[0] == 0
        assert conn.execute("SELECT COUNT(*) FROM budget_items").fetchone()[0] == 0
    finally:
        conn.close()
    assert client.get("/api/auth/user", headers=headers).status_code == 401


@pytest.mark.asyncio
async def test_resolve_auth_user_dispatches_on_role():
    await UserService.upsert_user({"sub": "svc-1", "email": "svc-1@example.com"})
    assert (await ProfileService.resolve_auth_user("svc-1")).role_data is None

    await ProfileService.complete_profile_setup("svc-1", "couple", {"coupleName": "Svc"})
    resolved = await ProfileService.resolve_auth_user("svc-1")
    assert isinstance(resolved.role_data, CoupleRead)
    assert resolved.role_data.couple_name == "Svc"


@pytest.mark.asyncio
async def test_setup_service_errors():
    with pytest.raises(NotFoundError):
        await ProfileService.complete_profile_setup("missing", "couple", {"coupleName": "X"})
    with pytest.raises(InvalidRoleError):
        await ProfileService.complete_profile_setup("missing", "admin", {})

    await UserService.upsert_user({"sub": "svc-2", "email": "svc-2@example.com"})
    vendor = await ProfileService.complete_profile_setup(
        "svc-2",
        "vendor",
        {
            "business_name": "Bloom",
            "category": "Florist",
            "description": "Flowers",
            "country": "UK",
            "state": "England",
            "city": "Bath",
            "location": "Bath",
        },
    )
    assert isinstance(vendor, VendorRead)
    assert vendor.location == "Bath"
    with pytest.raises(ConflictError):
        await ProfileService.complete_profile_setup("svc-2", "individual", {"fullName": "Again"})


def test_profile_update_rejects_null_required_name(client, make_user):
    couple = make_user("user-8", "couple", coupleName="Alex & Sam")
    response = client.put("/api/profile", json={"coupleName": None}, headers=couple)
    assert response.status_code == 422
    assert "coupleName" in response.json()["message"]

    individual = make_user("user-9", "individual", fullName="Jamie Lee")
    assert client.put("/api/profile", json={"fullName": None}, headers=individual).status_code == 422
    assert client.get("/api/auth/user", headers=individual).json()["roleData"]["fullName"] == "Jamie Lee"


def test_token_without_user_row_is_unauthorized(client):
    headers = headers_for("never-logged-in")
    assert client.put("/api/settings", json={"marketingEmails": True}, headers=headers).status_code == 401
    response = client.post("/api/consumer/save-vendor", json={"vendorId": "v-1"}, headers=headers)
    assert response.status_code == 401
    assert client.post("/api/objects/upload", headers=headers).status_code == 401


def test_email_taken_by_another_identity_conflicts(client, login):
    login("a1", email="same@example.com")
    response = client.post("/api/auth/login", headers=headers_for("a2", email="same@example.com"))
    assert response.status_code == 409
    assert response.json()["message"] == "Email is already registered to another account"
    assert client.get("/api/auth/user", headers=headers_for("a2")).status_code == 401
