"""
Document CRUD operations.

Create, lookup, delete and owner-scoped listing for DocumentModel. Methods
flush but never commit; the calling service owns the transaction.

Dependencies: sqlalchemy, second_brain.boundary.db.models
System role: Document persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.db.models.document_model import DocumentModel, DocumentType


class DocumentCRUD:
    """CRUD operations for DocumentModel."""

    async def create(
        self,
        session: AsyncSession,
        *,
        owner_id: UUID,
        content: Any,
        type: DocumentType,
        title: str | None = None,
    ) -> DocumentModel:
        """
        Insert a document and load its generated id and timestamps.

        A missing title falls back to the column default.
        """
        document = DocumentModel(owner_id=owner_id, content=content, type=type)
        if title is not None:
            document.title = title
        session.add(document)
        await session.flush()
        await session.refresh(document)
        return document

    async def get_by_id(self, session: AsyncSession, document_id: UUID) -> DocumentModel | None:
        result = await session.execute(select(DocumentModel).where(DocumentModel.id == document_id))
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, document_id: UUID) -> bool:
        """Delete one document row. Returns False when it did not exist."""
        result = await session.execute(delete(DocumentModel).where(DocumentModel.id == document_id))
        return result.rowcount > 0

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve an owner's documents, most recently updated first.

        Args:
            session: Async database session
            owner_id: Owning user
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels owned by owner_id
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.updated_at.desc(), DocumentModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()
