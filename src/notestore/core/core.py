from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from notestore.config import Config

if TYPE_CHECKING:
    from notestore.core.modules.note.service import NoteService


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""


class Services:
    """Service registry, started and stopped in registration order."""

    note: NoteService

    def __init__(self, database: AsyncDatabase[dict[str, Any]], config: Config) -> None:
        from notestore.core.modules.note.service import NoteService  # noqa: PLC0415

        self.note = NoteService(database, collection_name=config.notes_collection)
        self._services: list[Service] = [self.note]

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, MongoDB client, and services."""
        self.config = config
        self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.services = Services(self.database, config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
