"""
Document ORM model.

A note or uploaded PDF owned by exactly one user. The content is stored as
the editor's JSON tree; indexing derives plain text from it.

Dependencies: sqlalchemy, second_brain.boundary.db.base
System role: Source-of-truth document persistence
"""

import enum
import uuid
from typing import Any

from sqlalchemy import JSON, Enum, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from second_brain.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentType(str, enum.Enum):
    """
    Document origin.

    NOTE: Created and edited in the note editor
    PDF: Created from an uploaded PDF, content holds per-page text blocks
    """

    NOTE = "note"
    PDF = "pdf"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key
        owner_id: Owning user; every read is scoped by it
        title: Display title (not indexed)
        content: JSON content tree
        type: DocumentType
        active_index_version: Chunk version readers may see, None when unindexed
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_owner_updated", "owner_id", "updated_at"),)

    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="Untitled")
    content: Mapped[Any] = mapped_column(JSON, nullable=True)
    type: Mapped[DocumentType] = mapped_column(
        Enum(DocumentType, native_enum=False),
        nullable=False,
        default=DocumentType.NOTE,
    )
    active_index_version: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        doc="index_version of the chunk set currently visible to retrieval",
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, owner_id={self.owner_id}, type={self.type})>"
