"""
Question answering over the owner's notes.

Retrieves owner-scoped chunks, assembles a bounded context and asks the
generator to answer from it. With no retrieved chunks the canned answer is
returned and the generator is never called.

Dependencies: sqlalchemy, second_brain.core.retrieval, second_brain.core.providers
System role: RAG query orchestration
"""

import logging
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.vdb import RetrievedChunk
from second_brain.core.exceptions import ValidationError
from second_brain.core.providers import AnswerGenerator
from second_brain.core.retrieval import NO_RELEVANT_CONTENT_ANSWER, ContextAssembler, Retriever

logger = logging.getLogger(__name__)


class QueryAnswer(BaseModel):
    """Answer text and the chunks that grounded it."""

    answer: str
    sources: list[RetrievedChunk] = Field(default_factory=list)


class QueryService:
    """RAG flow: retrieve, assemble, generate."""

    def __init__(
        self,
        db: AsyncSession,
        retriever: Retriever,
        assembler: ContextAssembler,
        generator: AnswerGenerator,
        top_k: int = 5,
    ) -> None:
        self.db = db
        self._retriever = retriever
        self._assembler = assembler
        self._generator = generator
        self._top_k = top_k

    async def answer(self, owner_id: UUID, query: str) -> QueryAnswer:
        """
        Answer query from the owner's notes.

        Args:
            owner_id: Caller
            query: Natural-language question

        Returns:
            QueryAnswer: Answer and the chunks used as context

        Raises:
            ValidationError: Blank query
            EmbeddingFailure / QuotaExceeded / GenerationFailure: Provider errors
        """
        if not query or not query.strip():
            raise ValidationError("Query is required", field="query")

        results = await self._retriever.search(self.db, owner_id, query, k=self._top_k)
        if not results:
            logger.info(f"{__name__}:answer - no chunks for owner_id={owner_id}, canned answer")
            return QueryAnswer(answer=NO_RELEVANT_CONTENT_ANSWER, sources=[])

        context = self._assembler.assemble(results)
        answer = await self._generator.generate(query, context.text)

        logger.info(
            f"{__name__}:answer - owner_id={owner_id} retrieved={len(results)} "
            f"used={len(context.used)} answer_len={len(answer)}"
        )
        return QueryAnswer(answer=answer, sources=context.used)
