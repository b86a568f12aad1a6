"""
Chat domain models and schemas.

Request/response schemas for question answering.

Dependencies: pydantic
System role: Chat API contracts
"""

from uuid import UUID

from pydantic import Field

from second_brain.boundary.vdb import RetrievedChunk
from second_brain.models.common import CamelModel


class ChatRequest(CamelModel):
    """Request schema for a question."""

    query: str = Field(min_length=1, max_length=4000, description="User question")


class SourceMetadata(CamelModel):
    owner_id: UUID
    page_number: int | None = None
    section_title: str | None = None


class ChatSource(CamelModel):
    """One chunk used to ground the answer."""

    document_id: UUID
    text: str
    score: float
    metadata: SourceMetadata

    @classmethod
    def from_chunk(cls, chunk: RetrievedChunk) -> "ChatSource":
        return cls(
            document_id=chunk.document_id,
            text=chunk.text,
            score=chunk.score,
            metadata=SourceMetadata(
                owner_id=chunk.metadata.owner_id,
                page_number=chunk.metadata.page_number,
                section_title=chunk.metadata.section_title,
            ),
        )


class ChatResponse(CamelModel):
    """Response schema for a question."""

    answer: str
    sources: list[ChatSource]
