"""Pure conversions between request models, stored documents and responses."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from notestore.core.modules.note.models import CreateNoteRequest, Note, NoteResponse, UpdateNoteRequest
from notestore.errors import MalformedDocumentError, SerializationError


def to_storable_document(request: CreateNoteRequest) -> dict[str, Any]:
    """Build the document to insert for a new note.

    Optional fields are materialized with their defaults. Identifier and
    timestamps are left for the caller to add at insert time.
    """
    try:
        data = request.model_dump()
    except PydanticSerializationError as exc:
        raise SerializationError(f"Cannot serialize create request: {exc}") from exc
    return {
        "title": data["title"],
        "content": data["content"],
        "category": data["category"] if data["category"] is not None else "",
        "published": data["published"] if data["published"] is not None else False,
    }


def to_update_document(request: UpdateNoteRequest) -> dict[str, Any]:
    """Build the partial document for a $set update.

    Fields that are missing or null in the request are left out, so they keep
    their stored values.
    """
    try:
        return request.model_dump(exclude_none=True)
    except PydanticSerializationError as exc:
        raise SerializationError(f"Cannot serialize update request: {exc}") from exc


def to_response(document: dict[str, Any]) -> NoteResponse:
    """Convert a stored note document to its client representation."""
    try:
        note = Note.model_validate(document)
    except PydanticValidationError as exc:
        raise MalformedDocumentError(f"Stored note {document.get('_id')} is malformed: {exc}") from exc
    return NoteResponse(
        id=str(note.id),
        title=note.title,
        content=note.content,
        category=note.category if note.category is not None else "",
        published=note.published if note.published is not None else False,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )
