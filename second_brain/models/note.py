"""
Note domain models and schemas.

Request/response schemas for note CRUD.

Dependencies: pydantic
System role: Note API contracts
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from second_brain.boundary.db.models import DocumentType
from second_brain.models.common import CamelModel


class NoteCreateRequest(CamelModel):
    title: str | None = Field(default=None, max_length=255)


class NoteUpdateRequest(CamelModel):
    """Only fields present in the request body are applied."""

    title: str | None = Field(default=None, max_length=255)
    content: Any = Field(default=None, description="Editor JSON content tree")


class NoteResponse(CamelModel):
    """Response schema for a note or uploaded document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    content: Any = None
    type: DocumentType
    active_index_version: UUID | None = None
    created_at: datetime
    updated_at: datetime
