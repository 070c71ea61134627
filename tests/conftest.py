from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest
from firebase_admin import messaging
from google.cloud.firestore_v1.types import StructuredQuery

from mentorchat.firebase_service import FirestoreService
from mentorchat.push_service import FCMService


class _FakeDocRef:
    def __init__(self, db, collection, doc_id):
        self._db = db
        self.id = doc_id
        self.path = f"{collection}/{doc_id}"
        self.collection_name = collection

    def get(self):
        data = self._db.data.get(self.collection_name, {}).get(self.id)
        return _FakeSnapshot(self, data)


class _FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


_IS_NULL = StructuredQuery.UnaryFilter.Operator.IS_NULL
_IS_NOT_NULL = StructuredQuery.UnaryFilter.Operator.IS_NOT_NULL


def _matches(data, field_filter):
    op, expected = field_filter.op_string, field_filter.value
    # Newer clients turn "== None" / "!= None" into unary operators
    if op == _IS_NULL:
        op, expected = "==", None
    elif op == _IS_NOT_NULL:
        op, expected = "!=", None
    present = field_filter.field_path in data
    actual = data.get(field_filter.field_path)
    if op == "==":
        return actual is None if expected is None else present and actual == expected
    if op == "!=":
        if expected is None:
            return present and actual is not None
        return present and actual != expected
    if op == "<=":
        return actual is not None and actual <= expected
    raise AssertionError(f"unsupported operator {op}")


class _FakeQuery:
    def __init__(self, db, collection, filters=()):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)

    def where(self, *, filter):
        return _FakeQuery(self._db, self._collection, self._filters + (filter,))

    def stream(self):
        if self._db.fail_queries:
            raise self._db.fail_queries
        self._db.queries.append((self._collection, self._filters))
        docs = self._db.data.get(self._collection, {})
        for doc_id, data in list(docs.items()):
            if all(_matches(data, f) for f in self._filters):
                yield _FakeSnapshot(_FakeDocRef(self._db, self._collection, doc_id), data)


class _FakeCollection(_FakeQuery):
    def document(self, doc_id):
        return _FakeDocRef(self._db, self._collection, doc_id)


class _FakeBatch:
    def __init__(self, db):
        self._db = db
        self._deletes = []

    def delete(self, reference):
        self._deletes.append(reference)

    def commit(self):
        if self._db.fail_commits:
            raise self._db.fail_commits
        for ref in self._deletes:
            self._db.data.get(ref.collection_name, {}).pop(ref.id, None)
        self._db.commits.append([ref.path for ref in self._deletes])


class FakeFirestore:
    """In-memory stand-in for firestore.Client covering the calls we make."""

    def __init__(self, data=None):
        self.data = {name: dict(docs) for name, docs in (data or {}).items()}
        self.queries = []
        self.commits = []
        self.fail_queries = None
        self.fail_commits = None

    def collection(self, name):
        return _FakeCollection(self, name)

    def batch(self):
        return _FakeBatch(self)


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def store(fake_db):
    return FirestoreService(db=fake_db)


@pytest.fixture
def sent_messages(monkeypatch):
    """Capture multicast messages instead of calling FCM."""
    sent = []

    def fake_send_each_for_multicast(message, dry_run=False, app=None):
        sent.append(message)
        return SimpleNamespace(success_count=len(message.tokens), failure_count=0)

    monkeypatch.setattr(messaging, "send_each_for_multicast", fake_send_each_for_multicast)
    return sent


@pytest.fixture
def push(sent_messages):
    return FCMService(app=object())


@pytest.fixture
def mentorchat_logs(caplog):
    """caplog for the "mentorchat" logger, which may not propagate to root."""
    logger = logging.getLogger("mentorchat")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger="mentorchat")
    yield caplog
    logger.removeHandler(caplog.handler)
