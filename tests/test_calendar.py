import sqlite3
from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import vendor_id_of
from wedsimplify_api.app.core.db import get_database_path
from wedsimplify_api.app.schemas.calendar import to_calendar_day


@pytest.fixture
def vendor(make_user):
    return make_user("vendor-1", "vendor")


def availability_rows(vendor_id):
    conn = sqlite3.connect(get_database_path())
    try:
        return conn.execute(
            "SELECT date, is_available, event_title FROM vendor_availability WHERE vendor_id = ?",
            (vendor_id,),
        ).fetchall()
    finally:
        conn.close()


def test_setting_a_day_twice_keeps_one_row(client, vendor):
    first = client.put(
        "/api/vendor/availability",
        json={"date": "2025-06-01", "isAvailable": False, "eventTitle": "Smith Wedding"},
        headers=vendor,
    )
    assert first.status_code == 200
    second = client.put(
        "/api/calendar", json={"date": "2025-06-01", "isAvailable": True}, headers=vendor
    )
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]

    rows = availability_rows(vendor_id_of(client, vendor))
    assert rows == [("2025-06-01", 1, None)]


def test_timestamps_are_truncated_to_the_utc_day(client, vendor):
    response = client.put(
        "/api/calendar",
        json={"date": "2025-06-01T23:30:00-05:00", "isAvailable": False},
        headers=vendor,
    )
    assert response.json()["date"] == "2025-06-02"

    response = client.put(
        "/api/calendar",
        json={"date": "2025-06-02T04:00:00.000Z", "isAvailable": True},
        headers=vendor,
    )
    assert response.json()["date"] == "2025-06-02"
    assert len(availability_rows(vendor_id_of(client, vendor))) == 1


def test_listing_and_booked_dates(client, vendor):
    for day, available in (("2025-07-03", False), ("2025-07-01", True), ("2025-07-02", False)):
        client.put("/api/calendar", json={"date": day, "isAvailable": available}, headers=vendor)

    listed = client.get("/api/calendar", headers=vendor).json()
    assert [row["date"] for row in listed] == ["2025-07-01", "2025-07-02", "2025-07-03"]

    bounded = client.get(
        "/api/vendor/availability", params={"start": "2025-07-02", "end": "2025-07-02"}, headers=vendor
    ).json()
    assert [row["date"] for row in bounded] == ["2025-07-02"]

    booked = client.get("/api/calendar/booked", headers=vendor).json()
    assert booked == ["2025-07-02", "2025-07-03"]


def test_public_vendor_availability(client, vendor):
    client.put("/api/calendar", json={"date": "2025-08-15", "isAvailable": False}, headers=vendor)
    vendor_id = vendor_id_of(client, vendor)
    response = client.get(f"/api/vendors/{vendor_id}/availability")
    assert response.status_code == 200
    assert [row["isAvailable"] for row in response.json()] == [False]
    assert client.get("/api/vendors/unknown/availability").status_code == 404


def test_invalid_date_is_rejected(client, vendor):
    response = client.put(
        "/api/calendar", json={"date": "next tuesday", "isAvailable": False}, headers=vendor
    )
    assert response.status_code == 422


def test_calendar_day_normalisation():
    assert to_calendar_day(date(2025, 1, 31)) == date(2025, 1, 31)
    assert to_calendar_day(datetime(2025, 1, 31, 23, 59)) == date(2025, 1, 31)
    plus_two = timezone(timedelta(hours=2))
    assert to_calendar_day(datetime(2025, 2, 1, 1, 0, tzinfo=plus_two)) == date(2025, 1, 31)
    with pytest.raises(ValueError):
        to_calendar_day(20250131)
