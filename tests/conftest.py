"""
Shared fixtures: in-memory Firestore, Storage bucket and auth provider,
wired into the service singletons the routes resolve.
"""

import itertools
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from google.api_core import exceptions as google_exceptions

from safety_hub.core.exceptions import AuthError
from safety_hub.main import app
from safety_hub.models.user import Identity
from safety_hub.services import (
    auth_service,
    complaint_service,
    contacts_service,
    dashboard_service,
    evidence_service,
    local_store,
    session_store,
)


class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, collection: "FakeCollection", doc_id: str):
        self.collection = collection
        self.id = doc_id

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self.collection.docs.get(self.id))

    def set(self, data: Dict) -> None:
        self.collection.db.check()
        self.collection.docs[self.id] = dict(data)

    def update(self, data: Dict) -> None:
        self.collection.db.check()
        self.collection.db.update_calls.append((self.id, dict(data)))
        if self.id not in self.collection.docs:
            raise google_exceptions.NotFound(f"No document to update: {self.id}")
        self.collection.docs[self.id].update(data)


class FakeQuery:
    def __init__(self, collection: "FakeCollection", filters=None, order=None):
        self.collection = collection
        self.filters = filters or []
        self.order = order

    def where(self, field: str, op: str, value):
        assert op == "==", "only equality filters are used"
        return FakeQuery(self.collection, self.filters + [(field, value)], self.order)

    def order_by(self, field: str, direction: str = "ASCENDING"):
        return FakeQuery(self.collection, self.filters, (field, direction))

    def stream(self):
        self.collection.db.check()
        self.collection.db.queries.append((self.filters, self.order))
        items = [
            (doc_id, data) for doc_id, data in self.collection.docs.items()
            if all(data.get(field) == value for field, value in self.filters)
        ]
        if self.order:
            field, direction = self.order
            items.sort(key=lambda item: item[1][field], reverse=direction == "DESCENDING")
        return iter([FakeSnapshot(doc_id, data) for doc_id, data in items])


class FakeCollection(FakeQuery):
    def __init__(self, db: "FakeFirestore", name: str):
        self.db = db
        self.name = name
        self.docs: Dict[str, Dict] = {}
        super().__init__(self)

    def document(self, doc_id: Optional[str] = None) -> FakeDocumentRef:
        return FakeDocumentRef(self, doc_id or self.db.next_id())

    def add(self, data: Dict):
        self.db.check()
        ref = self.document()
        self.docs[ref.id] = dict(data)
        return None, ref


class FakeFirestore:
    def __init__(self):
        self._collections: Dict[str, FakeCollection] = {}
        self._ids = itertools.count(1)
        self.fail = False
        self.queries: List = []
        self.update_calls: List = []

    def next_id(self) -> str:
        return f"doc{next(self._ids)}"

    def check(self) -> None:
        if self.fail:
            raise google_exceptions.ServiceUnavailable("firestore unavailable")

    def collection(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(self, name)
        return self._collections[name]

    def collections(self):
        return list(self._collections.values())


class FakeBlob:
    def __init__(self, bucket: "FakeBucket", path: str):
        self.bucket = bucket
        self.path = path
        self.metadata = None

    def upload_from_string(self, data: bytes, content_type: str = None) -> None:
        if any(marker in self.path for marker in self.bucket.fail_on):
            raise self.bucket.fail_with(f"storage rejected {self.path}")
        self.bucket.uploaded[self.path] = (data, content_type, self.metadata)


class FakeBucket:
    name = "safety-demo.appspot.com"

    def __init__(self):
        self.uploaded: Dict[str, tuple] = {}
        self.fail_on: List[str] = []
        self.fail_with = google_exceptions.ServiceUnavailable

    def blob(self, path: str) -> FakeBlob:
        return FakeBlob(self, path)


class FakeAuthProvider:
    def __init__(self):
        self.accounts: Dict[str, tuple] = {}
        self._uids = itertools.count(1)

    def register(self, email: str, password: str) -> str:
        uid = f"uid{next(self._uids)}"
        self.accounts[email] = (uid, password)
        return uid

    def _identity(self, email: str) -> Identity:
        uid, _ = self.accounts[email]
        return Identity(uid=uid, email=email, id_token=f"id-{uid}", refresh_token=f"refresh-{uid}")

    def sign_in(self, email: str, password: str) -> Identity:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthError("Invalid email or password.")
        return self._identity(email)

    def sign_up(self, email: str, password: str) -> Identity:
        if email in self.accounts:
            raise AuthError("An account with this email already exists.")
        self.register(email, password)
        return self._identity(email)

    def refresh(self, refresh_token: str, email: str = "") -> Identity:
        for account_email, (uid, _) in self.accounts.items():
            if refresh_token == f"refresh-{uid}":
                return self._identity(account_email)
        raise AuthError("Your session has expired. Please log in again.")

    def sign_out(self, identity) -> None:
        pass


USER_EMAIL = "asha@example.com"
USER_PASSWORD = "secret123"


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def fake_bucket():
    return FakeBucket()


@pytest.fixture
def fake_auth():
    provider = FakeAuthProvider()
    provider.register(USER_EMAIL, USER_PASSWORD)
    return provider


@pytest.fixture
def state_path(tmp_path):
    return str(tmp_path / "local_state.json")


@pytest.fixture
def services(monkeypatch, fake_db, fake_bucket, fake_auth, state_path):
    """Point every service singleton at the fakes and a temp state file."""
    monkeypatch.setattr(local_store, "_local_store", local_store.LocalStore(state_path))
    monkeypatch.setattr(auth_service, "_auth_provider", fake_auth)
    monkeypatch.setattr(session_store, "_session_store", None)
    monkeypatch.setattr(contacts_service, "_contact_list", None)
    monkeypatch.setattr(
        complaint_service, "_complaint_repository", complaint_service.ComplaintRepository(fake_db)
    )
    monkeypatch.setattr(
        evidence_service,
        "_evidence_uploader",
        evidence_service.EvidenceUploader(evidence_service.EvidenceStorage(fake_bucket), max_bytes=1024),
    )
    monkeypatch.setattr(dashboard_service, "_user_dashboards", {})
    monkeypatch.setattr(dashboard_service, "_admin_dashboard", None)
    return {"db": fake_db, "bucket": fake_bucket, "auth": fake_auth}


@pytest.fixture
def client(services):
    return TestClient(app)


@pytest.fixture
def user_client(client):
    resp = client.post("/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert resp.status_code == 200, resp.text
    return client


@pytest.fixture
def admin_client(client):
    resp = client.post("/auth/admin/login", json={"email": "admin1@safety.com", "password": "admin123"})
    assert resp.status_code == 200, resp.text
    return client
