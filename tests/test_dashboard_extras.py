import pytest

from safety_hub.models.dashboard import DevicePosition
from safety_hub.services.location_service import capture_location, format_location


def test_format_location_four_decimals():
    assert format_location(18.52043, 73.856744) == "18.5204, 73.8567"
    assert format_location(-33.8688, 151.2093) == "-33.8688, 151.2093"


@pytest.mark.parametrize("position", [
    None,
    DevicePosition(error="User denied Geolocation"),
    DevicePosition(latitude=12.0),
    DevicePosition(latitude=95.0, longitude=10.0),
])
def test_unusable_positions_give_sentinel(position):
    assert capture_location(position) == "Location not available"


def test_location_endpoint(user_client):
    body = user_client.post("/dashboard/location", json={"latitude": 18.52043, "longitude": 73.856744}).json()
    assert body == {"location": "18.5204, 73.8567", "available": True}

    body = user_client.post("/dashboard/location", json={"error": "timeout"}).json()
    assert body == {"location": "Location not available", "available": False}

    body = user_client.post("/dashboard/location").json()
    assert body["available"] is False


def test_emergency_alert_is_a_stub(user_client):
    user_client.post("/contacts", json={"contact": "+1-555-0100"})
    user_client.post("/dashboard/location", json={"latitude": 1.5, "longitude": 2.5})

    body = user_client.post("/dashboard/emergency").json()

    assert body["dispatched"] is False
    assert body["trusted_contacts"] == 1
    assert body["location"] == "1.5000, 2.5000"
    assert body["notification"]["title"] == "Emergency Alert Sent"


def test_tips_wrap_around(user_client):
    assert user_client.post("/dashboard/tips/prev").json()["index"] == 4
    assert user_client.post("/dashboard/tips/next").json()["index"] == 0
    tip = user_client.post("/dashboard/tips/next").json()
    assert tip["index"] == 1
    assert tip["tip"] == "Share your location with trusted contacts."
    assert user_client.get("/dashboard/tips").json() == tip


def test_dashboard_stays_usable_when_store_is_down(user_client, services):
    services["db"].fail = True

    sos = user_client.post("/dashboard/emergency")
    assert sos.status_code == 200
    assert sos.json()["dispatched"] is False

    assert user_client.get("/dashboard/tips").status_code == 200
    assert user_client.get("/dashboard").json()["complaints"] == []

    assert user_client.get("/dashboard/complaints").status_code == 502
