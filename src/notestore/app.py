from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from notestore.config import Config
from notestore.core.core import Core
from notestore.core.modules.note.models import CreateNoteRequest, NoteListResponse, NoteResponse, UpdateNoteRequest
from notestore.errors import NotFoundError


class App:
    """Facade for all application operations, turns missing notes into NotFoundError."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def list_notes(self, page: int, limit: int) -> NoteListResponse:
        return await self._core.services.note.list_notes(page, limit)

    async def create_note(self, request: CreateNoteRequest) -> NoteResponse:
        note = await self._core.services.note.create_note(request)
        if note is None:
            raise NotFoundError("Note was created but could not be read back")
        return note

    async def get_note(self, note_id: str) -> NoteResponse:
        note = await self._core.services.note.get_note(note_id)
        if note is None:
            raise NotFoundError(f"Note with ID: {note_id} not found")
        return note

    async def update_note(self, note_id: str, request: UpdateNoteRequest) -> NoteResponse:
        """Apply a partial update to a note."""
        note = await self._core.services.note.update_note(note_id, request)
        if note is None:
            raise NotFoundError(f"Note with ID: {note_id} not found")
        return note

    async def delete_note(self, note_id: str) -> None:
        if not await self._core.services.note.delete_note(note_id):
            raise NotFoundError(f"Note with ID: {note_id} not found")
