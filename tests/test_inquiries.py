import pytest

from conftest import vendor_id_of
from wedsimplify_api.app.core.exceptions import ValidationError
from wedsimplify_api.app.schemas.inquiry import InquiryStatus
from wedsimplify_api.app.services.inquiry_service import InquiryService


@pytest.fixture
def parties(client, make_user):
    consumer = make_user("couple-1", "couple", coupleName="Alex & Sam")
    vendor = make_user("vendor-1", "vendor")
    return consumer, vendor, vendor_id_of(client, vendor)


def send_inquiry(client, headers, vendor_id, message="Interested"):
    response = client.post(
        "/api/inquiries",
        json={"vendorId": vendor_id, "message": message, "budget": 3000, "eventDate": "2025-09-20"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_inquiry_lifecycle(client, parties):
    consumer, vendor, vendor_id = parties
    inquiry = send_inquiry(client, consumer, vendor_id)
    assert inquiry["status"] == "pending"
    assert inquiry["coupleId"] is not None
    assert inquiry["individualId"] is None
    assert inquiry["eventDate"] == "2025-09-20"

    received = client.get("/api/inquiries/received", headers=vendor).json()
    assert [i["id"] for i in received] == [inquiry["id"]]

    response = client.put(
        f"/api/inquiries/{inquiry['id']}/respond",
        json={"status": "accepted", "vendorResponse": "Let's talk"},
        headers=vendor,
    )
    assert response.status_code == 200

    fetched = client.get(f"/api/inquiries/{inquiry['id']}", headers=consumer).json()
    assert fetched["status"] == "accepted"
    assert fetched["vendorResponse"] == "Let's talk"


def test_second_response_overwrites_first(client, parties):
    consumer, vendor, vendor_id = parties
    inquiry = send_inquiry(client, consumer, vendor_id)
    client.put(
        f"/api/inquiries/{inquiry['id']}",
        json={"status": "responded", "vendorResponse": "Checking dates"},
        headers=vendor,
    )
    response = client.put(
        f"/api/inquiries/{inquiry['id']}", json={"status": "declined"}, headers=vendor
    )
    assert response.json()["status"] == "declined"
    assert response.json()["vendorResponse"] == "Checking dates"


def test_only_the_receiving_vendor_may_respond(client, parties, make_user):
    consumer, _, vendor_id = parties
    other_vendor = make_user("vendor-2", "vendor", businessName="Rival")
    inquiry = send_inquiry(client, consumer, vendor_id)

    response = client.put(
        f"/api/inquiries/{inquiry['id']}/respond", json={"status": "accepted"}, headers=other_vendor
    )
    assert response.status_code == 403
    fetched = client.get(f"/api/inquiries/{inquiry['id']}", headers=consumer).json()
    assert fetched["status"] == "pending"


def test_cannot_move_back_to_pending(client, parties):
    consumer, vendor, vendor_id = parties
    inquiry = send_inquiry(client, consumer, vendor_id)
    response = client.put(
        f"/api/inquiries/{inquiry['id']}/respond", json={"status": "pending"}, headers=vendor
    )
    assert response.status_code == 422


def test_blank_message_is_rejected(client, parties):
    consumer, _, vendor_id = parties
    response = client.post(
        "/api/inquiries", json={"vendorId": vendor_id, "message": "   "}, headers=consumer
    )
    assert response.status_code == 422
    assert response.json() == {"message": "Message is required"}


def test_unknown_vendor_is_not_found(client, parties):
    consumer, _, _ = parties
    response = client.post(
        "/api/inquiries", json={"vendorId": "nope", "message": "Hello"}, headers=consumer
    )
    assert response.status_code == 404


def test_consumer_lists_only_own_inquiries(client, parties, make_user):
    consumer, _, vendor_id = parties
    other = make_user("individual-1", "individual", fullName="Jamie Lee")
    mine = send_inquiry(client, consumer, vendor_id, "Mine")
    theirs = send_inquiry(client, other, vendor_id, "Theirs")

    assert [i["id"] for i in client.get("/api/inquiries", headers=consumer).json()] == [mine["id"]]
    assert [i["id"] for i in client.get("/api/inquiries/sent", headers=other).json()] == [theirs["id"]]
    assert theirs["individualId"] is not None

    assert client.get(f"/api/inquiries/{theirs['id']}", headers=consumer).status_code == 404


def test_vendor_list_is_newest_first(client, parties):
    consumer, vendor, vendor_id = parties
    first = send_inquiry(client, consumer, vendor_id, "First")
    second = send_inquiry(client, consumer, vendor_id, "Second")
    listed = client.get("/api/inquiries", headers=vendor).json()
    assert [i["id"] for i in listed] == [second["id"], first["id"]]


def test_vendor_cannot_send_inquiries(client, parties):
    _, vendor, vendor_id = parties
    response = client.post(
        "/api/inquiries", json={"vendorId": vendor_id, "message": "Hi me"}, headers=vendor
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Consumer profile not found"


def test_inquiries_notify_the_other_party(client, parties):
    consumer, vendor, vendor_id = parties
    inquiry = send_inquiry(client, consumer, vendor_id)

    vendor_feed = client.get("/api/notifications", headers=vendor).json()
    assert len(vendor_feed) == 1
    assert vendor_feed[0]["type"] == "inquiry"
    assert vendor_feed[0]["relatedId"] == inquiry["id"]
    assert vendor_feed[0]["isRead"] is False

    client.put(
        f"/api/inquiries/{inquiry['id']}/respond",
        json={"status": "accepted", "vendorResponse": "See you"},
        headers=vendor,
    )
    consumer_feed = client.get("/api/notifications", headers=consumer).json()
    assert [n["type"] for n in consumer_feed] == ["inquiry_response"]
    assert consumer_feed[0]["message"] == "See you"


@pytest.mark.asyncio
async def test_respond_rejects_pending_status_before_lookup():
    with pytest.raises(ValidationError):
        await InquiryService.respond_to_inquiry("anyone", "missing", InquiryStatus.PENDING)
