from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from notestore.core.core import Service
from notestore.core.db import duplicate_key_fields, parse_object_id, translate_store_errors
from notestore.core.modules.note.indexes import TitleIndex
from notestore.core.modules.note.mapper import to_response, to_storable_document, to_update_document
from notestore.core.modules.note.models import CreateNoteRequest, NoteListResponse, NoteResponse, UpdateNoteRequest
from notestore.core.modules.note.query_builder import build_id_filter, build_list_window, build_set_update
from notestore.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE
from notestore.errors import DuplicateTitleError
from notestore.utils import StrictClock

logger = structlog.get_logger(__name__)


class NoteService(Service):
    """Create, read, update, delete and list notes in a single collection.

    Lookups that match nothing return None (or False for delete) instead of
    raising. Driver errors never escape: they are re-raised as StorageError
    subclasses, or DuplicateTitleError for unique title violations.
    """

    def __init__(
        self,
        database: AsyncDatabase[dict[str, Any]],
        collection_name: str = "notes",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(database)
        self._collection = database.get_collection(collection_name)
        self._title_index = TitleIndex(self._collection)
        self._clock = clock if clock is not None else StrictClock()

    async def on_start(self) -> None:
        """Create the unique title index."""
        await self._title_index.ensure()

    async def list_notes(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> NoteListResponse:
        """Get one page of notes ordered by id."""
        window = build_list_window(page, limit)
        with translate_store_errors("list_notes"):
            cursor = self._collection.find(window.filter).sort(window.sort).skip(window.skip).limit(window.limit)
            docs = await cursor.to_list()
        notes = [to_response(doc) for doc in docs]

        logger.debug("list_notes", page=page, limit=limit, skip=window.skip, returned=len(notes))
        return NoteListResponse(results=len(notes), notes=notes)

    async def create_note(self, request: CreateNoteRequest) -> NoteResponse | None:
        """Insert a new note and return it as stored.

        Returns None if the inserted note cannot be read back. The insert and
        the read are separate round trips, so this can happen even though the
        insert succeeded.

        Raises:
            DuplicateTitleError: If a note with the same title exists
            IndexSetupError: If the unique title index cannot be confirmed
        """
        await self._title_index.ensure()

        document = to_storable_document(request)
        timestamp = self._clock()
        document["createdAt"] = timestamp
        document["updatedAt"] = timestamp

        with translate_store_errors("create_note"):
            try:
                result = await self._collection.insert_one(document)
            except DuplicateKeyError as exc:
                if "title" not in duplicate_key_fields(exc):
                    raise
                logger.info("create_note_duplicate_title", title=request.title)
                raise DuplicateTitleError(request.title) from exc
            doc = await self._collection.find_one(build_id_filter(result.inserted_id))

        if doc is None:
            logger.warning("create_note_reread_missed", note_id=str(result.inserted_id))
            return None
        logger.info("note_created", note_id=str(result.inserted_id))
        return to_response(doc)

    async def get_note(self, note_id: str) -> NoteResponse | None:
        """Get note by ID, or None if it does not exist."""
        oid = parse_object_id(note_id)
        with translate_store_errors("get_note"):
            doc = await self._collection.find_one(build_id_filter(oid))
        if doc is None:
            logger.debug("get_note_not_found", note_id=note_id)
            return None
        return to_response(doc)

    async def update_note(self, note_id: str, request: UpdateNoteRequest) -> NoteResponse | None:
        """Update specific note fields (partial update).

        Only fields present in the request are written. updatedAt is refreshed
        even when the request is empty.

        Args:
            note_id: The ID of the note to update
            request: Fields to change

        Returns:
            The note after the update, or None if no note has this ID
        """
        oid = parse_object_id(note_id)
        fields = to_update_document(request)
        fields["updatedAt"] = self._clock()

        with translate_store_errors("update_note"):
            try:
                doc = await self._collection.find_one_and_update(
                    build_id_filter(oid),
                    build_set_update(fields),
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError as exc:
                if "title" not in duplicate_key_fields(exc):
                    raise
                raise DuplicateTitleError(request.title) from exc

        if doc is None:
            logger.debug("update_note_not_found", note_id=note_id)
            return None
        logger.debug("note_updated", note_id=note_id, fields=sorted(fields))
        return to_response(doc)

    async def delete_note(self, note_id: str) -> bool:
        """Delete note by ID. Returns False if no note had this ID."""
        oid = parse_object_id(note_id)
        with translate_store_errors("delete_note"):
            result = await self._collection.delete_one(build_id_filter(oid))
        if result.deleted_count == 0:
            logger.debug("delete_note_not_found", note_id=note_id)
            return False
        logger.info("note_deleted", note_id=note_id)
        return True
