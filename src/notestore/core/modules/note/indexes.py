import asyncio
from typing import Any

import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from notestore.errors import IndexSetupError

logger = structlog.get_logger(__name__)

TITLE_INDEX_NAME = "title_unique"


class TitleIndex:
    """Unique index on note titles, created once per process."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection
        self._lock = asyncio.Lock()
        self._confirmed = False

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    async def ensure(self) -> None:
        """Create the unique title index unless an earlier call already confirmed it.

        Raises:
            IndexSetupError: If the index could not be created or confirmed
        """
        if self._confirmed:
            return
        async with self._lock:
            if self._confirmed:
                return
            try:
                await self._collection.create_index([("title", 1)], unique=True, name=TITLE_INDEX_NAME)
            except PyMongoError as exc:
                logger.exception("title_index_failed", collection=self._collection.name)
                raise IndexSetupError(f"Cannot create unique title index: {exc}") from exc
            self._confirmed = True
            logger.debug("title_index_confirmed", collection=self._collection.name)
