import base64

import pytest
from webapp import create_app
from webapp.errors import BlobStoreError, NotificationError
from webapp.extensions import db as _db, get_services
from webapp.models.account import Account


class FakeBlobStore:
    """In-memory blob store with switchable failures."""

    def __init__(self):
        self.objects = {}
        self.fail_put = False
        self.fail_delete = False

    def put(self, key, data, content_type):
        if self.fail_put:
            raise BlobStoreError(f"upload of {key} failed")
        self.objects[key] = (data, content_type)

    def delete(self, key):
        if self.fail_delete:
            raise BlobStoreError(f"delete of {key} failed")
        self.objects.pop(key, None)


class RecordingNotifier:
    def __init__(self):
        self.events = []
        self.fail = False

    def publish(self, event):
        if self.fail:
            raise NotificationError("topic unreachable")
        self.events.append(event)


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(blob_store, notifier):
    """Fresh application and in-memory database per test."""
    app = create_app("testing", blob_store=blob_store, notifier=notifier)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def services(app):
    return get_services()


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def auth_header():
    return basic_auth


@pytest.fixture
def make_account(services):
    """Insert an account directly and return (account, auth headers)."""

    def _make(username="owner@example.com", password="Secret123"):
        account = services.repository.create(
            Account(
                first_name="Test",
                last_name="User",
                username=username,
                password=services.hasher.hash(password),
            )
        )
        return account, basic_auth(username, password)

    return _make


@pytest.fixture
def owner(make_account):
    return make_account("owner@example.com", "Secret123")


@pytest.fixture
def stranger(make_account):
    return make_account("stranger@example.com", "Other1234")


VALID_PRODUCT = {
    "name": "X",
    "description": "Y",
    "sku": "S",
    "manufacturer": "M",
    "quantity": 50,
}


@pytest.fixture
def valid_product():
    return dict(VALID_PRODUCT)


@pytest.fixture
def product(client, owner):
    """A product created through the API by ``owner``."""
    _, headers = owner
    resp = client.post("/v1/product", json=VALID_PRODUCT, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()
