"""
Owner-scoped semantic retriever.

Embeds the query in query mode and ranks the owner's visible chunks by
cosine similarity.

Dependencies: sqlalchemy, second_brain.core.providers, second_brain.boundary.vdb
System role: Retrieval stage of the question-answering flow
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.vdb import ChunkStore, RetrievedChunk
from second_brain.core.exceptions import ValidationError
from second_brain.core.providers import EmbeddingGateway

logger = logging.getLogger(__name__)


class Retriever:
    """Top-k nearest chunks for a query, restricted to one owner."""

    def __init__(
        self,
        embeddings: EmbeddingGateway,
        chunk_store: ChunkStore | None = None,
        oversample_factor: int = 20,
    ) -> None:
        if oversample_factor < 1:
            raise ValueError("oversample_factor must be at least 1")
        self._embeddings = embeddings
        self._chunk_store = chunk_store or ChunkStore()
        self._oversample_factor = oversample_factor

    async def search(
        self,
        session: AsyncSession,
        owner_id: uuid.UUID,
        query: str,
        k: int = 5,
    ) -> list[RetrievedChunk]:
        """
        Retrieve the k chunks most similar to query.

        Args:
            session: Async database session
            owner_id: Owner whose chunks are searched
            query: Natural-language query
            k: Number of results

        Returns:
            list[RetrievedChunk]: Most similar first, ties in insertion order

        Raises:
            ValidationError: Missing owner, blank query, or k < 1
            EmbeddingFailure: Query embedding failed
            QuotaExceeded: Provider rate limit
        """
        if owner_id is None:
            raise ValidationError("owner_id is required", field="owner_id")
        if k < 1:
            raise ValidationError("k must be at least 1", field="k")
        if not query or not query.strip():
            raise ValidationError("query must not be empty", field="query")

        vector = await self._embeddings.embed_query(query)
        candidates = await self._chunk_store.nearest(
            session,
            owner_id,
            vector,
            limit=k * self._oversample_factor,
        )
        ranked = sorted(candidates, key=lambda chunk: chunk.score, reverse=True)[:k]

        logger.info(
            f"{__name__}:search - owner_id={owner_id} candidates={len(candidates)} "
            f"returned={len(ranked)}"
        )
        return ranked
