"""
Chunk store over the relational database.

Persists chunk embeddings next to their documents and answers owner-scoped
nearest-neighbour queries with exact cosine similarity computed in numpy.

Each indexing pass writes under a fresh index_version and flips the
document's active_index_version in the same transaction, so readers only
ever see one complete chunk set per document.

Dependencies: sqlalchemy, numpy, second_brain.boundary.db
System role: Vector index for retrieval
"""

import logging
import uuid
from typing import Sequence

import numpy as np
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.db.models import ChunkModel, DocumentModel
from second_brain.boundary.vdb.vector_schemas import ChunkMetadata, ChunkRecord, RetrievedChunk
from second_brain.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ChunkStore:
    """
    Owner-scoped chunk index.

    Write methods flush but never commit; the caller owns the transaction.
    Every read takes owner_id as a required argument.
    """

    async def replace_document_chunks(
        self,
        session: AsyncSession,
        document: DocumentModel,
        records: Sequence[ChunkRecord],
    ) -> uuid.UUID:
        """
        Write a complete chunk set and make it the visible one.

        Args:
            session: Async database session (caller commits)
            document: Document being indexed
            records: Embedded chunks of the new pass

        Returns:
            uuid.UUID: The new index_version
        """
        index_version = uuid.uuid4()
        session.add_all(
            ChunkModel(
                document_id=document.id,
                owner_id=document.owner_id,
                index_version=index_version,
                position=record.position,
                text=record.text,
                embedding=list(record.embedding),
                page_number=record.page_number,
                section_title=record.section_title,
            )
            for record in records
        )
        document.active_index_version = index_version
        await session.flush()

        await session.execute(
            delete(ChunkModel).where(
                ChunkModel.document_id == document.id,
                ChunkModel.index_version != index_version,
            )
        )
        logger.info(
            f"{__name__}:replace_document_chunks - document_id={document.id} "
            f"version={index_version} chunks={len(records)}"
        )
        return index_version

    async def clear_document(self, session: AsyncSession, document: DocumentModel) -> None:
        """Remove every chunk of document and mark it unindexed."""
        document.active_index_version = None
        await self.delete_for_document(session, document.id)
        await session.flush()

    async def delete_for_document(self, session: AsyncSession, document_id: uuid.UUID) -> int:
        """
        Delete all chunk versions of a document.

        Returns:
            int: Number of deleted rows
        """
        result = await session.execute(
            delete(ChunkModel).where(ChunkModel.document_id == document_id)
        )
        return result.rowcount or 0

    async def nearest(
        self,
        session: AsyncSession,
        owner_id: uuid.UUID,
        vector: Sequence[float],
        limit: int,
    ) -> list[RetrievedChunk]:
        """
        Exact cosine nearest neighbours among the owner's visible chunks.

        Args:
            session: Async database session
            owner_id: Owner whose chunks are searched (required)
            vector: Query embedding
            limit: Maximum number of results

        Returns:
            list[RetrievedChunk]: Highest similarity first; equal scores keep
            insertion order

        Raises:
            ValidationError: owner_id missing or limit below 1
        """
        if owner_id is None:
            raise ValidationError("owner_id is required for chunk search", field="owner_id")
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        stmt = (
            select(ChunkModel)
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(
                ChunkModel.owner_id == owner_id,
                DocumentModel.owner_id == owner_id,
                ChunkModel.index_version == DocumentModel.active_index_version,
            )
            .order_by(ChunkModel.created_at, ChunkModel.document_id, ChunkModel.position)
        )
        rows = (await session.execute(stmt)).scalars().all()

        query = np.asarray(vector, dtype=np.float64)
        rows = [row for row in rows if len(row.embedding) == query.shape[0]]
        if not rows:
            return []

        matrix = np.asarray([row.embedding for row in rows], dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)

        order = np.argsort(-scores, kind="stable")[:limit]
        logger.debug(
            f"{__name__}:nearest - owner_id={owner_id} candidates={len(rows)} returned={len(order)}"
        )
        return [
            RetrievedChunk(
                chunk_id=rows[i].id,
                document_id=rows[i].document_id,
                text=rows[i].text,
                score=float(scores[i]),
                position=rows[i].position,
                metadata=ChunkMetadata(
                    owner_id=rows[i].owner_id,
                    page_number=rows[i].page_number,
                    section_title=rows[i].section_title,
                ),
            )
            for i in order
        ]
