"""In-memory stand-in for the subset of pymongo's async collection API the services use."""

import copy
from typing import Any

import bson
from bson.binary import UuidRepresentation
from bson.codec_options import CodecOptions
from pymongo.errors import DuplicateKeyError

# Same decoding behaviour as the AsyncMongoClient built in Core
CODEC_OPTIONS = CodecOptions(tz_aware=True, uuid_representation=UuidRepresentation.STANDARD)


def bson_round_trip(document: dict[str, Any]) -> dict[str, Any]:
    return bson.decode(bson.encode(document, codec_options=CODEC_OPTIONS), codec_options=CODEC_OPTIONS)


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in query.items())


class FakeInsertOneResult:
    def __init__(self, inserted_id: Any) -> None:
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __aiter__(self) -> "FakeCursor":
        self._iter = iter(self._documents)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.indexes: list[tuple[list[tuple[str, int]], bool]] = []
        self.fail_with: Exception | None = None

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        self.indexes.append((keys, unique))
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    async def insert_one(self, document: dict[str, Any]) -> FakeInsertOneResult:
        self._check_failure()
        for keys, unique in self.indexes:
            if not unique:
                continue
            fields = [field for field, _ in keys]
            if any(all(existing.get(f) == document.get(f) for f in fields) for existing in self.documents):
                raise DuplicateKeyError("E11000 duplicate key error", code=11000)
        self.documents.append(bson_round_trip(document))
        return FakeInsertOneResult(document["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check_failure()
        return next((copy.deepcopy(doc) for doc in self.documents if _matches(doc, query)), None)

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self._check_failure()
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents if _matches(doc, query or {})])

    async def find_one_and_delete(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check_failure()
        for index, doc in enumerate(self.documents):
            if _matches(doc, query):
                return self.documents.pop(index)
        return None


class FakeDatabase:
    def __init__(self, name: str = "expensetracker_test") -> None:
        self.name = name
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection(name))
