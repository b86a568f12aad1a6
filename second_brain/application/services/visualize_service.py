"""
Knowledge graph visualization service.

Resolves the text to visualize (an owned document or raw text) and runs
graph extraction.

Dependencies: sqlalchemy, second_brain.core.knowledge_graph
System role: Visualization orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.db.CRUD import DocumentCRUD
from second_brain.core.document_processing import extract_plain_text
from second_brain.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from second_brain.core.knowledge_graph import KnowledgeGraph, KnowledgeGraphExtractor

logger = logging.getLogger(__name__)


class VisualizeService:
    """Build knowledge graphs for documents or raw text."""

    def __init__(self, db: AsyncSession, extractor: KnowledgeGraphExtractor) -> None:
        self.db = db
        self._extractor = extractor
        self._crud = DocumentCRUD()

    async def visualize(
        self,
        owner_id: UUID,
        document_id: UUID | None = None,
        text: str | None = None,
    ) -> KnowledgeGraph:
        """
        Extract a knowledge graph.

        A document id takes precedence over raw text.

        Raises:
            ValidationError: Neither document id nor text given
            NotFoundError / AuthorizationError: Document lookup failed
        """
        title = None
        if document_id is not None:
            document = await self._crud.get_by_id(self.db, document_id)
            if document is None:
                raise NotFoundError(str(document_id))
            if document.owner_id != owner_id:
                raise AuthorizationError(document_id=str(document_id))
            text = extract_plain_text(document.content)
            title = document.title
        elif text is None:
            raise ValidationError("Either documentId or text is required", field="documentId")

        logger.info(f"{__name__}:visualize - owner_id={owner_id} text_len={len(text or '')}")
        return await self._extractor.extract_graph(text, title=title)
