"""
Indexing request/response schemas.

Dependencies: pydantic
System role: Ingest and upload API contracts
"""

from uuid import UUID

from pydantic import Field

from second_brain.models.common import CamelModel
from second_brain.models.note import NoteResponse


class IngestRequest(CamelModel):
    text: str | None = Field(default=None, description="Supplemental text indexed ahead of the content")


class IngestResponse(CamelModel):
    document_id: UUID
    chunks_created: int


class UploadResponse(CamelModel):
    document: NoteResponse
    chunks_created: int
