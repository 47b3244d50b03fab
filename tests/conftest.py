"""Pytest configuration for all tests.

Provides two kinds of database doubles:
- ``mock_database`` / ``mock_collection``: AsyncMock-based, for asserting
  exactly what reaches the driver.
- ``memory_database``: a small in-memory collection store, for scenario
  tests that create, read, update and delete through the same data.
"""

import copy
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    """Equality, $and and $or matching; enough for the scenarios under test."""
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, clause) for clause in condition):
                return False
        elif key == "$and":
            if not all(_matches(document, clause) for clause in condition):
                return False
        elif document.get(key) != condition:
            return False
    return True


class InMemoryCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self._documents if length is None else self._documents[:length]


class InMemoryCollection:
    """Mimics the subset of AsyncIOMotorCollection the accessor uses."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []

    def _find(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        return [doc for doc in self.documents if _matches(doc, query)]

    async def insert_one(self, document: dict[str, Any], **kwargs: Any) -> SimpleNamespace:
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)

    async def insert_many(self, documents: list[dict[str, Any]], **kwargs: Any) -> SimpleNamespace:
        inserted_ids = []
        for document in documents:
            result = await self.insert_one(document)
            inserted_ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=inserted_ids, acknowledged=True)

    async def find_one(self, query: dict[str, Any], **kwargs: Any) -> dict[str, Any] | None:
        found = self._find(query)
        return copy.deepcopy(found[0]) if found else None

    def find(self, query: dict[str, Any], **kwargs: Any) -> InMemoryCursor:
        return InMemoryCursor(copy.deepcopy(self._find(query)))

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
        **kwargs: Any,
    ) -> dict[str, Any] | None:
        found = self._find(query)
        if not found:
            return None
        before = copy.deepcopy(found[0])
        found[0].update(update["$set"])
        return copy.deepcopy(found[0]) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query: dict[str, Any], **kwargs: Any) -> dict[str, Any] | None:
        found = self._find(query)
        if not found:
            return None
        self.documents.remove(found[0])
        return found[0]

    async def update_many(
        self, query: dict[str, Any], update: dict[str, Any], **kwargs: Any
    ) -> SimpleNamespace:
        found = self._find(query)
        modified = 0
        for document in found:
            before = dict(document)
            document.update(update["$set"])
            modified += document != before
        return SimpleNamespace(matched_count=len(found), modified_count=modified)

    async def delete_many(self, query: dict[str, Any], **kwargs: Any) -> SimpleNamespace:
        found = self._find(query)
        for document in found:
            self.documents.remove(document)
        return SimpleNamespace(deleted_count=len(found))


class InMemoryDatabase:
    def __init__(self, name: str = "docbase_test") -> None:
        self.name = name
        self.collections: dict[str, InMemoryCollection] = {}

    def __getitem__(self, name: str) -> InMemoryCollection:
        return self.collections.setdefault(name, InMemoryCollection(name))


@pytest.fixture
def memory_database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def mock_collection() -> MagicMock:
    """A Motor collection double with async CRUD methods.

    ``find`` is synchronous in Motor and returns a cursor whose
    ``to_list`` is awaited.
    """
    collection = MagicMock()
    collection.insert_one = AsyncMock(
        return_value=SimpleNamespace(inserted_id=ObjectId(), acknowledged=True)
    )
    collection.insert_many = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.update_many = AsyncMock(
        return_value=SimpleNamespace(matched_count=0, modified_count=0)
    )
    collection.delete_many = AsyncMock(return_value=SimpleNamespace(deleted_count=0))

    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def mock_database(mock_collection: MagicMock) -> MagicMock:
    database = MagicMock()
    database.name = "docbase_test"
    database.__getitem__.return_value = mock_collection
    return database
