import pytest


@pytest.fixture
def couple(make_user):
    return make_user("couple-1", "couple", coupleName="Alex & Sam", budget=20000)


def test_budget_item_round_trip(client, couple):
    payload = {
        "category": "Photography",
        "description": "Full day coverage",
        "estimatedCost": 2500,
        "actualCost": 2400,
        "isPaid": True,
        "notes": "Deposit paid",
    }
    created = client.post("/api/budget", json=payload, headers=couple)
    assert created.status_code == 201
    item = created.json()

    listed = client.get("/api/budget-items", headers=couple).json()
    assert listed == [item]
    for key, value in payload.items():
        assert item[key] == value


def test_budget_update_delete_and_summary(client, couple):
    venue = client.post(
        "/api/budget", json={"category": "Venue", "description": "Hall", "estimatedCost": 8000}, headers=couple
    ).json()
    client.post(
        "/api/budget",
        json={"category": "Flowers", "description": "Bouquets", "estimatedCost": 600, "actualCost": 550},
        headers=couple,
    )

    response = client.put(
        f"/api/budget/{venue['id']}", json={"actualCost": 7500, "isPaid": True}, headers=couple
    )
    assert response.status_code == 200
    assert response.json()["description"] == "Hall"

    summary = client.get("/api/budget/summary", headers=couple).json()
    assert summary == {
        "itemCount": 2,
        "totalEstimated": 8600,
        "totalActual": 8050,
        "totalPaid": 7500,
        "totalBudget": 20000,
        "remaining": 11950,
    }

    assert client.delete(f"/api/budget/{venue['id']}", headers=couple).status_code == 204
    assert len(client.get("/api/budget", headers=couple).json()) == 1


def test_budget_is_scoped_to_owner(client, couple, make_user):
    item = client.post(
        "/api/budget", json={"category": "Venue", "description": "Hall"}, headers=couple
    ).json()
    other = make_user("individual-1", "individual", fullName="Jamie Lee")

    assert client.get("/api/budget", headers=other).json() == []
    assert client.put(f"/api/budget/{item['id']}", json={"notes": "x"}, headers=other).status_code == 404
    assert client.delete(f"/api/budget/{item['id']}", headers=other).status_code == 404


def test_budget_requires_consumer_profile(client, make_user):
    vendor = make_user("vendor-1", "vendor")
    response = client.get("/api/budget", headers=vendor)
    assert response.status_code == 404
    assert response.json()["message"] == "Consumer profile not found"


def test_individual_summary_without_budget(client, make_user):
    individual = make_user("individual-2", "individual", fullName="Jamie Lee")
    summary = client.get("/api/budget/summary", headers=individual).json()
    assert summary["itemCount"] == 0
    assert summary["totalBudget"] is None
    assert summary["remaining"] is None


def test_timeline_ordering(client, couple):
    for title, due in (("Send invites", "2025-05-01"), ("Someday", None), ("Book venue", "2025-01-15")):
        body = {"title": title}
        if due:
            body["dueDate"] = due
        assert client.post("/api/timeline", json=body, headers=couple).status_code == 201

    titles = [item["title"] for item in client.get("/api/timeline-items", headers=couple).json()]
    assert titles == ["Book venue", "Send invites", "Someday"]


def test_timeline_toggle_and_delete(client, couple):
    item = client.post(
        "/api/timeline", json={"title": "Taste cakes", "priority": "high"}, headers=couple
    ).json()
    assert item["isCompleted"] is False
    assert item["priority"] == "high"

    response = client.put(f"/api/timeline/{item['id']}", json={"isCompleted": True}, headers=couple)
    assert response.json()["isCompleted"] is True
    assert response.json()["title"] == "Taste cakes"

    assert client.delete(f"/api/timeline/{item['id']}", headers=couple).status_code == 204
    assert client.put(f"/api/timeline/{item['id']}", json={"isCompleted": False}, headers=couple).status_code == 404


def test_timeline_priority_is_validated(client, couple):
    response = client.post(
        "/api/timeline", json={"title": "Urgent", "priority": "urgent"}, headers=couple
    )
    assert response.status_code == 422


def test_null_for_required_columns_is_rejected(client, couple):
    item = client.post(
        "/api/timeline", json={"title": "Send invitations"}, headers=couple
    ).json()
    for field in ("isCompleted", "priority", "title"):
        response = client.put(f"/api/timeline/{item['id']}", json={field: None}, headers=couple)
        assert response.status_code == 422, field

    budget = client.post(
        "/api/budget", json={"category": "Venue", "description": "Hall", "notes": "Old"}, headers=couple
    ).json()
    for field in ("category", "description", "isPaid"):
        response = client.put(f"/api/budget/{budget['id']}", json={field: None}, headers=couple)
        assert response.status_code == 422, field

    cleared = client.put(f"/api/budget/{budget['id']}", json={"notes": None}, headers=couple)
    assert cleared.status_code == 200
    assert cleared.json()["notes"] is None
    assert client.get("/api/timeline", headers=couple).json()[0]["title"] == "Send invitations"
