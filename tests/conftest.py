"""
Shared fixtures: a scripted model gateway and an in-memory stand-in for a
pymongo collection, so tests never reach Gemini or MongoDB.
"""
import json
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from mindwatch.services.exceptions import ModelUnavailable
from mindwatch.services.model_gateway import ModelGateway

VALID_ANALYSIS: Dict[str, Any] = {
    "dominantEmotion": "sad",
    "sentimentScore": -0.6,
    "stressLevel": 7,
    "emotions": ["sad", "lonely"],
    "themes": ["work", "sleep"],
    "insights": "You sound worn down. It makes sense to feel this way after a hard week.",
    "suggestions": [
        "Take a slow walk after dinner",
        "Message a friend you trust",
        "Write down one thing that went okay today",
    ],
    "crisisSignals": False,
}


@pytest.fixture
def valid_analysis() -> Dict[str, Any]:
    return json.loads(json.dumps(VALID_ANALYSIS))


@pytest.fixture
def make_gateway():
    """Build a gateway whose `complete` returns `reply` or raises ModelUnavailable."""
    def _make(reply: str = "", fail: bool = False, kind: str = "unavailable"):
        gateway = MagicMock(spec=ModelGateway)
        if fail:
            gateway.complete = AsyncMock(side_effect=ModelUnavailable(kind, "test"))
        else:
            gateway.complete = AsyncMock(return_value=reply)
        return gateway
    return _make


class FakeCursor:
    def __init__(self, docs: List[dict]):
        self.docs = docs

    def sort(self, key: str, direction: int):
        self.docs = sorted(self.docs, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n: int):
        self.docs = self.docs[:n]
        return self

    def __iter__(self):
        return iter(list(self.docs))


class FakeResult:
    def __init__(self, inserted_id=None, deleted_count=0, inserted_ids=None):
        self.inserted_id = inserted_id
        self.inserted_ids = inserted_ids or []
        self.deleted_count = deleted_count


def _matches(doc: dict, query: dict) -> bool:
    for key, expected in query.items():
        value = doc.get(key)
        if isinstance(expected, dict):
            if "$gte" in expected and not value >= expected["$gte"]:
                return False
            if "$lt" in expected and not value < expected["$lt"]:
                return False
        elif value != expected:
            return False
    return True


class FakeCollection:
    """Just enough of pymongo.collection.Collection for the routers."""
    def __init__(self):
        self.docs: List[dict] = []
        # one entry per write call, listing the roles written
        self.writes: List[List[Any]] = []

    def find(self, query: dict = None):
        return FakeCursor([dict(d) for d in self.docs if _matches(d, query or {})])

    def find_one(self, query: dict):
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    def _store(self, doc: dict):
        doc = dict(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return doc["_id"]

    def insert_one(self, doc: dict):
        self.writes.append([doc.get("role")])
        return FakeResult(inserted_id=self._store(doc))

    def insert_many(self, docs: List[dict], ordered: bool = True):
        self.writes.append([d.get("role") for d in docs])
        return FakeResult(inserted_ids=[self._store(d) for d in docs])

    def delete_one(self, query: dict):
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return FakeResult(deleted_count=1)
        return FakeResult(deleted_count=0)

    def delete_many(self, query: dict):
        before = len(self.docs)
        self.docs = [d for d in self.docs if not _matches(d, query)]
        return FakeResult(deleted_count=before - len(self.docs))


@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection()
