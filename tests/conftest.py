"""Shared fixtures: spy pymongo collections and databases."""

from typing import Any, Dict, List, Optional

import pytest
from pymongo.results import InsertOneResult, UpdateResult

from docpersist import reset_mongo_db, set_mongo_db


class SpyCollection:
    """Records every write instead of talking to MongoDB."""

    def __init__(self, name: str = "spy", fail_with: Optional[Exception] = None) -> None:
        self.name = name
        self.fail_with = fail_with
        self.calls: List[tuple] = []
        self.write_concerns: List[Any] = []

    def insert_one(self, document: Dict[str, Any], **options: Any) -> InsertOneResult:
        self.calls.append(("insert_one", document, options))
        if self.fail_with is not None:
            raise self.fail_with
        return InsertOneResult(document["_id"], acknowledged=True)

    def update_one(self, filter: Dict[str, Any], update: Dict[str, Any], **options: Any) -> UpdateResult:
        self.calls.append(("update_one", filter, update, options))
        if self.fail_with is not None:
            raise self.fail_with
        return UpdateResult({"n": 1, "nModified": 1}, acknowledged=True)

    def with_options(self, write_concern: Any = None, **kwargs: Any) -> "SpyCollection":
        self.write_concerns.append(write_concern)
        return self

    @property
    def inserted(self) -> List[Dict[str, Any]]:
        return [call[1] for call in self.calls if call[0] == "insert_one"]

    @property
    def updates(self) -> List[tuple]:
        return [call[1:] for call in self.calls if call[0] == "update_one"]


class SpyDatabase:
    """Hands out one SpyCollection per collection name."""

    def __init__(self) -> None:
        self.name = "spy_db"
        self.collections: Dict[str, SpyCollection] = {}

    def __getitem__(self, name: str) -> SpyCollection:
        if name not in self.collections:
            self.collections[name] = SpyCollection(name)
        return self.collections[name]


@pytest.fixture
def collection() -> SpyCollection:
    return SpyCollection()


@pytest.fixture
def spy_db(monkeypatch: pytest.MonkeyPatch) -> SpyDatabase:
    """Install a SpyDatabase as the package database for the duration of a test."""
    monkeypatch.delenv("MONGO_PERSIST_IN_SAFE_MODE", raising=False)
    db = SpyDatabase()
    set_mongo_db(db)  # type: ignore[arg-type]
    yield db
    reset_mongo_db()
