"""Shared pytest fixtures."""

from typing import Any
from uuid import UUID

import pytest
from pymongo.errors import DuplicateKeyError

from tasktrack.core.modules.session.models import SessionIdentity
from tasktrack.core.modules.session.service import SessionService
from tasktrack.core.modules.session.store import MemorySessionStore
from tasktrack.core.modules.user.service import UserService

START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = START_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class RecordingStore(MemorySessionStore):
    """In-memory store that remembers every write it receives."""

    def __init__(self, clock: FakeClock) -> None:
        super().__init__(clock=clock)
        self.writes: list[tuple[str, str]] = []
        self.ttls: dict[str, int] = {}

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self.writes.append(("put", key))
        self.ttls[key] = ttl_seconds
        await super().put(key, value, ttl_seconds)

    async def delete(self, key: str) -> None:
        self.writes.append(("delete", key))
        await super().delete(key)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return RecordingStore(clock)


@pytest.fixture
def session_service(store, clock):
    return SessionService(store, clock=clock)


@pytest.fixture
def identity():
    return SessionIdentity(
        user_id=UUID("87654321-4321-8765-4321-876543218765"),
        email="ada@example.com",
        name="Ada Lovelace",
    )


@pytest.fixture
def lagging_store(clock):
    """Store whose own clock never moves, so keys outlive their expiresAt."""
    return RecordingStore(FakeClock(clock.now))


class FakeCollection:
    """Just enough of an async pymongo collection for ``UserService``."""

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: set[str] = set()

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if all(doc.get(field) == value for field, value in query.items()):
                return dict(doc)
        return None

    async def insert_one(self, doc: dict[str, Any]) -> None:
        for field in self.unique_fields:
            if any(existing.get(field) == doc.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error dup key: {{ {field} }}", code=11000)
        self.docs.append(dict(doc))

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False) -> str:
        if unique:
            self.unique_fields.update(field for field, _ in keys)
        return "_".join(f"{field}_{direction}" for field, direction in keys)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
async def user_service():
    service = UserService(FakeDatabase())  # type: ignore[arg-type]
    await service.on_start()
    return service
