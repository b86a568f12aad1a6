"""
Chunk ORM model.

One embedded piece of a document's text. Chunks written by the same indexing
pass share an index_version; only the version the document points at is
visible to retrieval.

Dependencies: sqlalchemy, second_brain.boundary.db.base
System role: Persisted vector index rows
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from second_brain.boundary.db.base import Base, UUIDMixin, utc_now


class ChunkModel(Base, UUIDMixin):
    """
    Chunk ORM model.

    Attributes:
        document_id: Parent document
        owner_id: Copied from the document; filter for every search
        index_version: Indexing pass that wrote this chunk
        position: Ordinal within the pass
        text: Chunk text (non-empty)
        embedding: Float list of the configured dimension
        page_number: Source page for PDF chunks
        section_title: Section heading when known
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "chunks"
    __table_args__ = (
        Index("ix_chunks_owner_version", "owner_id", "index_version"),
        Index("ix_chunks_document", "document_id"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    index_version: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    page_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    section_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ChunkModel(id={self.id}, document_id={self.document_id}, position={self.position})>"
