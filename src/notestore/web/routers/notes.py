from typing import Annotated

from fastapi import APIRouter, Query, Response

from notestore.core.modules.note.models import (
    CreateNoteRequest,
    NoteListResponse,
    SingleNoteResponse,
    UpdateNoteRequest,
)
from notestore.core.pagination import ListQuery
from notestore.web.deps import AppDep
from notestore.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])

_INVALID_ID = {"model": ErrorResponse, "description": "Malformed note ID"}
_NOT_FOUND = {"model": ErrorResponse, "description": "Note not found"}
_CONFLICT = {"model": ErrorResponse, "description": "A note with this title already exists"}


@router.get(
    "/notes",
    summary="List notes",
    description="Get one page of notes, ordered by creation. Pages past the end return an empty list.",
    operation_id="listNotes",
    responses={
        200: {"description": "Page of notes"},
        400: {"model": ErrorResponse, "description": "page or limit is not positive"},
    },
)
async def list_notes(app: AppDep, query: Annotated[ListQuery, Query()]) -> NoteListResponse:
    return await app.list_notes(query.page, query.limit)


@router.post(
    "/notes",
    summary="Create note",
    description="Create a new note. category defaults to an empty string and published to false.",
    operation_id="createNote",
    status_code=201,
    responses={
        201: {"description": "Note created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid request body"},
        409: _CONFLICT,
    },
)
async def create_note(request: CreateNoteRequest, app: AppDep) -> SingleNoteResponse:
    return SingleNoteResponse.wrap(await app.create_note(request))


@router.get(
    "/notes/{note_id}",
    summary="Get note",
    operation_id="getNote",
    responses={200: {"description": "Note details"}, 400: _INVALID_ID, 404: _NOT_FOUND},
)
async def get_note(note_id: str, app: AppDep) -> SingleNoteResponse:
    return SingleNoteResponse.wrap(await app.get_note(note_id))


@router.patch(
    "/notes/{note_id}",
    summary="Update note",
    description="Partially update a note. Only the fields provided are changed; updatedAt is always refreshed.",
    operation_id="updateNote",
    responses={200: {"description": "Note updated successfully"}, 400: _INVALID_ID, 404: _NOT_FOUND, 409: _CONFLICT},
)
async def update_note(note_id: str, request: UpdateNoteRequest, app: AppDep) -> SingleNoteResponse:
    return SingleNoteResponse.wrap(await app.update_note(note_id, request))


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    operation_id="deleteNote",
    status_code=204,
    responses={204: {"description": "Note deleted"}, 400: _INVALID_ID, 404: _NOT_FOUND},
)
async def delete_note(note_id: str, app: AppDep) -> Response:
    await app.delete_note(note_id)
    return Response(status_code=204)
