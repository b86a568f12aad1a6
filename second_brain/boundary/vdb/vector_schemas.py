"""
Vector index schemas.

Pydantic models for chunk writes and similarity search results.

Dependencies: pydantic
System role: Type definitions for chunk index operations
"""

import uuid

from pydantic import BaseModel, Field


class ChunkMetadata(BaseModel):
    """Metadata carried with every chunk."""

    owner_id: uuid.UUID = Field(description="Owner of the source document")
    page_number: int | None = Field(default=None, description="Page number in source document")
    section_title: str | None = Field(default=None, description="Section heading or title")


class ChunkRecord(BaseModel):
    """One chunk to be written by an indexing pass."""

    position: int = Field(ge=0, description="Ordinal within the pass")
    text: str = Field(min_length=1, description="Chunk text")
    embedding: list[float] = Field(description="Document-mode embedding")
    page_number: int | None = None
    section_title: str | None = None


class RetrievedChunk(BaseModel):
    """Single result from a similarity search."""

    chunk_id: uuid.UUID = Field(description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Source document")
    text: str = Field(description="Chunk text content")
    score: float = Field(description="Cosine similarity to the query")
    position: int = Field(default=0, description="Ordinal within its indexing pass")
    metadata: ChunkMetadata = Field(description="Chunk metadata")
