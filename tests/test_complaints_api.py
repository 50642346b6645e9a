import pytest

from safety_hub.core.exceptions import StoreError
from safety_hub.services.complaint_service import get_complaint_repository


def test_dashboard_requires_login(client):
    resp = client.post("/dashboard/complaints", json={"complaint": "hello"})
    assert resp.status_code == 401


def test_file_complaint_appears_in_own_listing(user_client, services):
    user_client.post("/dashboard/location", json={"latitude": 19.076012, "longitude": 72.877655})

    resp = user_client.post("/dashboard/complaints", json={"complaint": "Followed home from the station"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["notification"]["description"] == "Your complaint has been filed successfully."
    assert body["complaint"]["status"] == "submitted"
    assert body["complaint"]["location"] == "19.0760, 72.8777"
    assert body["complaint"]["userEmail"] == "asha@example.com"
    assert [c["id"] for c in body["complaints"]] == [body["complaint"]["id"]]

    listing = user_client.get("/dashboard/complaints").json()
    assert len(listing) == 1
    assert listing[0]["complaint"] == "Followed home from the station"
    assert listing[0]["status"] == "submitted"


def test_location_defaults_to_unavailable(user_client):
    body = user_client.post("/dashboard/complaints", json={"complaint": "Harassed at bus stop"}).json()
    assert body["complaint"]["location"] == "Location not available"


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_complaint_never_reaches_store(user_client, services, text):
    before = len(services["db"].collection("complaints").docs)

    resp = user_client.post("/dashboard/complaints", json={"complaint": text})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please describe the incident in detail."
    assert len(services["db"].collection("complaints").docs) == before


def test_listing_only_shows_own_complaints(user_client, services):
    services["db"].collection("complaints").add({
        "userId": "someone-else", "userEmail": "x@y.z", "complaint": "not mine",
        "location": "Location not available", "evidenceFiles": [], "status": "submitted",
    })
    user_client.post("/dashboard/complaints", json={"complaint": "mine"})

    listing = user_client.get("/dashboard/complaints").json()
    assert [c["complaint"] for c in listing] == ["mine"]


def test_store_failure_keeps_pending_evidence(user_client, services):
    user_client.post("/dashboard/evidence", files=[("files", ("a.jpg", b"img", "image/jpeg"))])
    services["db"].fail = True

    resp = user_client.post("/dashboard/complaints", json={"complaint": "Something happened"})
    assert resp.status_code == 502
    assert resp.json()["notification"]["description"] == "Failed to file complaint. Please try again."

    services["db"].fail = False
    body = user_client.post("/dashboard/complaints", json={"complaint": "Something happened"}).json()
    assert len(body["complaint"]["evidenceFiles"]) == 1


def test_evidence_is_attached_then_cleared(user_client):
    upload = user_client.post(
        "/dashboard/evidence",
        files=[("files", ("a.jpg", b"one", "image/jpeg")), ("files", ("b.mp4", b"two", "video/mp4"))],
    ).json()
    assert len(upload["evidence_files"]) == 2

    body = user_client.post("/dashboard/complaints", json={"complaint": "With evidence"}).json()
    assert sorted(body["complaint"]["evidenceFiles"]) == sorted(upload["evidence_files"])

    dashboard = user_client.get("/dashboard").json()
    assert dashboard["evidence_files"] == []


def test_dashboard_summary(user_client):
    body = user_client.get("/dashboard").json()
    assert body["email"] == "asha@example.com"
    assert body["location"] == "Location not available"
    assert body["complaints"] == []
    assert body["tip"]["index"] == 0
    assert body["tip"]["total"] == 5


def test_listing_failure_after_filing_still_reports_success(user_client, services, monkeypatch):
    user_client.post("/dashboard/evidence", files=[("files", ("a.jpg", b"img", "image/jpeg"))])

    def failing_listing(user_id):
        raise StoreError("Failed to fetch your complaints.")

    monkeypatch.setattr(get_complaint_repository(), "list_for_user", failing_listing)

    resp = user_client.post("/dashboard/complaints", json={"complaint": "Followed after the late shift"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["notification"]["description"] == "Your complaint has been filed successfully."
    assert len(body["complaint"]["evidenceFiles"]) == 1
    assert body["complaints"] == []
    assert len(services["db"].collection("complaints").docs) == 1
    assert user_client.get("/dashboard").json()["evidence_files"] == []
