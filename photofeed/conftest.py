# photofeed/conftest.py
"""
Shared pytest fixtures.

FakeFirestore covers the part of the Firestore client API the stores use
(collection/document/get/set/update, where/order_by/limit/stream, get_all),
so the app runs against memory instead of a real project.
"""
import copy
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from photofeed import create_app


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def get(self, transaction=None):
        self._collection._db._check()
        return FakeSnapshot(self.id, self._collection._docs.get(self.id))

    def set(self, data):
        self._collection._db._check()
        self._collection._docs[self.id] = copy.deepcopy(data)

    def update(self, data):
        self._collection._db._check()
        if self.id not in self._collection._docs:
            raise KeyError(self.id)
        self._collection._docs[self.id].update(copy.deepcopy(data))


class FakeQuery:
    def __init__(self, collection, filters=(), order=None, limit_to=None):
        self._collection = collection
        self._filters = tuple(filters)
        self._order = order
        self._limit = limit_to

    def where(self, field, op, value):
        if op != '==':
            raise NotImplementedError(op)
        return FakeQuery(self._collection, self._filters + ((field, value),), self._order, self._limit)

    def order_by(self, field, direction='ASCENDING'):
        return FakeQuery(self._collection, self._filters, (field, direction), self._limit)

    def limit(self, count):
        return FakeQuery(self._collection, self._filters, self._order, count)

    def stream(self):
        self._collection._db._check()
        items = [
            (doc_id, data) for doc_id, data in self._collection._docs.items()
            if all(data.get(field) == value for field, value in self._filters)
        ]
        if self._order:
            field, direction = self._order
            items.sort(key=lambda item: item[1].get(field), reverse=(direction == 'DESCENDING'))
        if self._limit is not None:
            items = items[:self._limit]
        return iter([FakeSnapshot(doc_id, copy.deepcopy(data)) for doc_id, data in items])


class FakeCollection(FakeQuery):
    def __init__(self, db, name):
        self._db = db
        self._docs = {}
        self.name = name
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocumentReference(self, doc_id or uuid.uuid4().hex)


class FakeFirestore:
    def __init__(self):
        self._collections = {}
        # Set to an exception instance to make every read and write raise it.
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def collection(self, name):
        if name not in self._collections:
            self._collections[name] = FakeCollection(self, name)
        return self._collections[name]

    def get_all(self, references):
        self._check()
        return iter([ref.get() for ref in references])


class TickingClock:
    """Returns strictly increasing UTC timestamps, one second apart."""
    def __init__(self, start=datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def app(fake_db):
    app = create_app('testing', db=fake_db)
    app.services['posts'].clock = TickingClock()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_store(app):
    return app.services['users']


@pytest.fixture
def post_store(app):
    return app.services['posts']


@pytest.fixture
def make_user(user_store):
    """Creates a user and returns its document."""
    def _make_user(username, password="secret-password", profile_picture=""):
        return user_store.create(username=username, password=password, profile_picture=profile_picture)
    return _make_user


@pytest.fixture
def auth_headers(app):
    """Builds an Authorization header carrying a valid token for `user_id`."""
    def _auth_headers(user_id):
        token = app.services['auth'].issue(user_id)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
