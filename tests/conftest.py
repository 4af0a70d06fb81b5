"""Shared pytest fixtures."""

import copy
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from typing import Any

import bson
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

import notestore.app
from notestore.app import App
from notestore.config import Config
from notestore.core.modules.note.service import NoteService
from notestore.web.server import create_fastapi_app


class FakeCursor:
    """Minimal async cursor supporting the chained calls NoteService makes."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, keys: list[tuple[str, int]]) -> "FakeCursor":
        for key, direction in reversed(keys):
            self._docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    async def to_list(self) -> list[dict[str, Any]]:
        # The driver encodes skip/limit into the find command as BSON
        bson.encode({"skip": self._skip, "limit": self._limit})
        docs = self._docs[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return [copy.deepcopy(doc) for doc in docs]


class FakeCollection:
    """In-memory stand-in for AsyncCollection.

    Writes are BSON-encoded first, so unencodable values fail the way they do
    in the driver. Enforces the unique title index once create_index has been
    called, raising the same DuplicateKeyError the server would. Set
    ``fail_with`` to make every data operation raise that error.
    """

    def __init__(self, name: str = "notes") -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[dict[str, Any]] = []
        self.create_index_calls = 0
        self.index_error: PyMongoError | None = None
        self.fail_with: PyMongoError | None = None
        self.lose_inserts = False

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _unique_fields(self) -> list[str]:
        return [index["keys"][0][0] for index in self.indexes if index["unique"]]

    def _check_unique(self, candidate: dict[str, Any]) -> None:
        for field in self._unique_fields():
            for doc in self.docs:
                if doc["_id"] != candidate["_id"] and field in candidate and doc.get(field) == candidate[field]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: test.{self.name} index: {field}_unique",
                        11000,
                        {"code": 11000, "keyPattern": {field: 1}, "keyValue": {field: candidate[field]}},
                    )

    def _find(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if all(doc.get(key) == value for key, value in filter.items()):
                return doc
        return None

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, name: str | None = None) -> str:
        self.create_index_calls += 1
        if self.index_error is not None:
            raise self.index_error
        if not any(index["name"] == name for index in self.indexes):
            self.indexes.append({"keys": keys, "unique": unique, "name": name})
        return name or ""

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        self._check_failure()
        document.setdefault("_id", ObjectId())
        bson.encode(document)
        self._check_unique(document)
        if not self.lose_inserts:
            self.docs.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        self._check_failure()
        doc = self._find(filter)
        return copy.deepcopy(doc) if doc is not None else None

    def find(self, filter: dict[str, Any]) -> FakeCursor:
        self._check_failure()
        return FakeCursor([doc for doc in self.docs if all(doc.get(k) == v for k, v in filter.items())])

    async def find_one_and_update(
        self,
        filter: dict[str, Any],
        update: dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        self._check_failure()
        bson.encode(update)
        doc = self._find(filter)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        updated = {**doc, **update["$set"]}
        self._check_unique(updated)
        doc.update(update["$set"])
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def delete_one(self, filter: dict[str, Any]) -> SimpleNamespace:
        self._check_failure()
        doc = self._find(filter)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(name))


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 1, 1, tzinfo=UTC))


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def collection(database):
    return database.get_collection("notes")


@pytest.fixture
def note_service(database, clock):
    """NoteService backed by the in-memory collection."""
    return NoteService(database, collection_name="notes", clock=clock)


@pytest.fixture
def config():
    return Config(database_url="mongodb://localhost:27017/notes_test", cors_origins=[])


@pytest.fixture
def app(monkeypatch, config, note_service):
    """App facade whose Core holds only the in-memory NoteService."""
    monkeypatch.setattr(notestore.app, "Core", lambda _: SimpleNamespace(services=SimpleNamespace(note=note_service)))
    return App(config)


@pytest.fixture
def client(app, config):
    """HTTP client for the FastAPI app, without running the MongoDB lifespan."""
    fastapi_app = create_fastapi_app(app, config)
    fastapi_app.state.app = app
    return TestClient(fastapi_app)


@pytest.fixture
def stored_note():
    """A stored note document as MongoDB returns it."""
    return {
        "_id": ObjectId("6521e59541a3ae69b39ecb46"),
        "title": "Groceries",
        "content": "Milk, eggs",
        "category": "home",
        "published": True,
        "createdAt": datetime(2024, 1, 1, 12, 0, tzinfo=UTC),
        "updatedAt": datetime(2024, 1, 2, 8, 30, tzinfo=UTC),
    }
