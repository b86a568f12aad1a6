"""
Document indexer.

Turns a document's content into the chunk set retrieval searches:
extract page segments, chunk, batch-embed, then swap the new chunk set in.
Embedding runs before any write, so a provider failure leaves the previous
index searchable.

Dependencies: sqlalchemy, second_brain.core.document_processing,
    second_brain.core.providers, second_brain.boundary
System role: Index builder for note create/update/upload/ingest
"""

import logging
import time
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.db.CRUD import DocumentCRUD
from second_brain.boundary.db.models import DocumentModel
from second_brain.boundary.vdb import ChunkRecord, ChunkStore
from second_brain.core.document_processing import (
    IndexResult,
    TextChunker,
    TextSegment,
    extract_pages,
    normalize_whitespace,
)
from second_brain.core.exceptions import AuthorizationError, EmbeddingFailure, NotFoundError
from second_brain.core.providers import EmbeddingGateway

logger = logging.getLogger(__name__)


class Indexer:
    """Build and replace the chunk index of one document."""

    def __init__(
        self,
        embeddings: EmbeddingGateway,
        chunker: TextChunker | None = None,
        chunk_store: ChunkStore | None = None,
        document_crud: DocumentCRUD | None = None,
    ) -> None:
        """
        Initialize indexer.

        Args:
            embeddings: Embedding gateway used in document mode
            chunker: Text chunker (defaults to 1000/200)
            chunk_store: Chunk index
            document_crud: Document CRUD
        """
        self._embeddings = embeddings
        self._chunker = chunker or TextChunker()
        self._chunk_store = chunk_store or ChunkStore()
        self._document_crud = document_crud or DocumentCRUD()

    async def reindex(
        self,
        session: AsyncSession,
        document_id: uuid.UUID,
        owner_id: uuid.UUID,
        supplemental_text: str | None = None,
    ) -> IndexResult:
        """
        Rebuild the index of an existing document.

        Args:
            session: Async database session
            document_id: Document to index
            owner_id: Caller; must own the document
            supplemental_text: Extra text indexed ahead of the content

        Returns:
            IndexResult: Number of chunks in the new visible set

        Raises:
            NotFoundError: Document does not exist
            AuthorizationError: Document owned by someone else
            EmbeddingFailure: Provider failure, previous index kept
            QuotaExceeded: Provider rate limit, previous index kept
        """
        document = await self._document_crud.get_by_id(session, document_id)
        if document is None:
            raise NotFoundError(str(document_id))
        if document.owner_id != owner_id:
            raise AuthorizationError(document_id=str(document_id))

        return await self._index(session, document, supplemental_text)

    async def index_new_document(
        self,
        session: AsyncSession,
        document: DocumentModel,
    ) -> IndexResult:
        """
        Index a document the caller has just created.

        Ownership is implied by creation. On failure nothing is written and
        the caller is expected to delete the document.
        """
        return await self._index(session, document, None)

    async def _index(
        self,
        session: AsyncSession,
        document: DocumentModel,
        supplemental_text: str | None,
    ) -> IndexResult:
        start = time.perf_counter()
        document_id = document.id

        segments = extract_pages(document.content)
        supplemental = normalize_whitespace(supplemental_text)
        if supplemental:
            segments = [TextSegment(text=supplemental), *segments]

        chunks = self._chunker.split_segments(segments)

        try:
            if not chunks:
                await self._chunk_store.clear_document(session, document)
                await session.commit()
                logger.info(f"{__name__}:_index - document_id={document_id} has no text, index cleared")
                return IndexResult(document_id=document_id, chunks_created=0)

            vectors = await self._embeddings.embed_documents([chunk.text for chunk in chunks])
            if len(vectors) != len(chunks):
                raise EmbeddingFailure(
                    "Embedding count does not match chunk count",
                    details={"expected": len(chunks), "received": len(vectors)},
                )

            records = [
                ChunkRecord(
                    position=chunk.position,
                    text=chunk.text,
                    embedding=vector,
                    page_number=chunk.page_number,
                    section_title=chunk.section_title,
                )
                for chunk, vector in zip(chunks, vectors)
            ]
            await self._chunk_store.replace_document_chunks(session, document, records)
            await session.commit()
        except Exception:
            await session.rollback()
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{__name__}:_index - document_id={document_id} chunks={len(records)} "
            f"elapsed_ms={elapsed_ms:.1f}"
        )
        return IndexResult(
            document_id=document_id,
            chunks_created=len(records),
            processing_time_ms=elapsed_ms,
        )
