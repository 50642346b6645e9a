import json

import pytest

from safety_hub.core.exceptions import NotFoundError, ValidationError
from safety_hub.services.contacts_service import TrustedContactList
from safety_hub.services.local_store import TRUSTED_CONTACTS_KEY, LocalStore


@pytest.fixture
def contacts(state_path):
    store = LocalStore(state_path)
    store.load()
    return TrustedContactList(store)


def test_add_then_remove_round_trip(contacts):
    contacts.add("+91-98200-00000")
    before = list(contacts.contacts)

    contacts.add("+1-555-0100")
    contacts.remove(len(contacts.contacts) - 1)

    assert contacts.contacts == before
    assert json.loads(contacts.local_store.get(TRUSTED_CONTACTS_KEY)) == before


def test_duplicates_and_any_format_allowed(contacts):
    contacts.add("call mom")
    contacts.add("call mom")
    assert contacts.contacts == ["call mom", "call mom"]


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_contact_rejected(contacts, value):
    with pytest.raises(ValidationError):
        contacts.add(value)
    assert contacts.contacts == []
    assert contacts.local_store.get(TRUSTED_CONTACTS_KEY) is None


def test_remove_by_position_keeps_order(contacts):
    for number in ["a", "b", "c"]:
        contacts.add(number)
    contacts.remove(1)
    assert contacts.contacts == ["a", "c"]


def test_remove_out_of_range(contacts):
    contacts.add("a")
    with pytest.raises(NotFoundError):
        contacts.remove(3)
    assert contacts.contacts == ["a"]


def test_contacts_persist_across_reload(contacts, state_path):
    contacts.add("+1-555-0100")
    store = LocalStore(state_path)
    store.load()
    assert TrustedContactList(store).contacts == ["+1-555-0100"]


def test_contacts_api(user_client):
    assert user_client.get("/contacts").json()["contacts"] == []

    resp = user_client.post("/contacts", json={"contact": "+1-555-0100"})
    assert resp.status_code == 200
    assert resp.json()["contacts"] == ["+1-555-0100"]
    assert resp.json()["notification"]["description"] == "Trusted contact added successfully."

    assert user_client.post("/contacts", json={"contact": "  "}).status_code == 400
    assert user_client.delete("/contacts/5").status_code == 404
    assert user_client.delete("/contacts/0").json()["contacts"] == []


def test_contacts_api_requires_login(client):
    assert client.get("/contacts").status_code == 401
