from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from redis.asyncio import Redis

from tasktrack.config import Config

if TYPE_CHECKING:
    from tasktrack.core.modules.session.service import SessionService
    from tasktrack.core.modules.session.store import SessionStore
    from tasktrack.core.modules.user.service import UserService


class Service:
    """Base class for services owned by Core."""

    def __init__(self) -> None:
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry; each service receives its backend handle explicitly."""

    user: UserService
    session: SessionService

    def __init__(self, database: AsyncDatabase[dict[str, Any]], session_store: SessionStore, session_ttl_seconds: int) -> None:
        from tasktrack.core.modules.session.service import SessionService  # noqa: PLC0415
        from tasktrack.core.modules.user.service import UserService  # noqa: PLC0415

        # Order matters for startup - users first
        self.user = UserService(database)
        self.session = SessionService(session_store, ttl_seconds=session_ttl_seconds)
        self._services: list[Service] = [self.user, self.session]

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, backends, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    redis: Redis | None
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, MongoDB, the session store, and services."""
        from tasktrack.core.modules.session.store import MemorySessionStore, RedisSessionStore, SessionStore  # noqa: PLC0415

        self.config = config
        self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard")
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])

        session_store: SessionStore
        if config.session_backend == "redis":
            self.redis = Redis.from_url(config.redis_url)
            session_store = RedisSessionStore(self.redis)
        else:
            self.redis = None
            session_store = MemorySessionStore()

        self.services = Services(self.database, session_store, config.session_ttl_seconds)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close backend connections on shutdown."""
        await self.services.stop_all()
        if self.redis is not None:
            await self.redis.aclose()
        await self.mongo_client.aclose()
