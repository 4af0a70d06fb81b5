from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from notestore.core.db import MongoModel


class Note(MongoModel):
    """Note as stored in the notes collection.

    Indexed on title - unique.
    """

    title: str
    content: str
    category: str | None = None  # always written as "" when absent, optional only for reading
    published: bool | None = None  # always written as False when absent, optional only for reading
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class CreateNoteRequest(BaseModel):
    """Request to create a new note."""

    title: str = Field(..., description="Note title, unique across all notes")
    content: str = Field(..., description="Note body")
    category: str | None = Field(None, description="Optional category, stored as an empty string when omitted")
    published: bool | None = Field(None, description="Publication flag, stored as false when omitted")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Shopping list",
                    "content": "Milk, eggs, coffee",
                    "category": "home",
                    "published": False,
                }
            ]
        }
    }


class UpdateNoteRequest(BaseModel):
    """Request to update a note (partial update)."""

    title: str | None = None
    content: str | None = None
    category: str | None = None
    published: bool | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"title": "Updated title"},
                {"published": True},
            ]
        }
    }


class NoteResponse(BaseModel):
    """Note as returned to clients."""

    id: str = Field(..., description="Note ID (24-character hex ObjectId)")
    title: str
    content: str
    category: str
    published: bool
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class NoteData(BaseModel):
    note: NoteResponse


class SingleNoteResponse(BaseModel):
    status: Literal["success"] = "success"
    data: NoteData

    @classmethod
    def wrap(cls, note: NoteResponse) -> "SingleNoteResponse":
        return cls(data=NoteData(note=note))


class NoteListResponse(BaseModel):
    status: Literal["success"] = "success"
    results: int = Field(..., description="Number of notes in this page", ge=0)
    notes: list[NoteResponse]
