"""
Document service orchestrator.

Coordinates note CRUD, PDF upload and explicit reindexing. Uploads are
indexed synchronously; if indexing fails the freshly created document is
deleted again before the error propagates.

Dependencies: sqlalchemy, second_brain.boundary, second_brain.core
System role: Document management orchestration
"""

import logging
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from second_brain.boundary.db.CRUD import DocumentCRUD
from second_brain.boundary.db.models import DocumentModel, DocumentType
from second_brain.boundary.vdb import ChunkStore
from second_brain.core.document_processing import IndexResult
from second_brain.core.document_processing.pdf_extractor import build_pdf_content, extract_pdf_pages
from second_brain.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from second_brain.core.indexing import Indexer
from second_brain.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

DEFAULT_NOTE_TITLE = "Untitled"
DEFAULT_PDF_TITLE = "Uploaded PDF"
MAX_UPLOAD_BYTES = 15 * 1024 * 1024
UPDATABLE_FIELDS = ("title", "content")


def is_pdf_upload(filename: str | None, content_type: str | None) -> bool:
    """Accept uploads whose content type mentions pdf or whose name ends in .pdf."""
    return "pdf" in (content_type or "").lower() or (filename or "").lower().endswith(".pdf")


class DocumentService:
    """
    Document service orchestrator.

    Handles the document lifecycle: create, list, update, delete, upload
    and reindex. All operations are scoped to the calling owner.
    """

    def __init__(
        self,
        db: AsyncSession,
        indexer: Indexer,
        chunk_store: ChunkStore | None = None,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document persistence
            indexer: Shared indexer
            chunk_store: Chunk index (for deletes)
            max_upload_bytes: Upload size limit
        """
        self.db = db
        self._indexer = indexer
        self._chunk_store = chunk_store or ChunkStore()
        self._crud = DocumentCRUD()
        self._max_upload_bytes = max_upload_bytes

    async def create_note(self, owner_id: UUID, title: str | None = None) -> DocumentModel:
        """Create an empty note."""
        document = await self._crud.create(
            self.db,
            owner_id=owner_id,
            title=(title or "").strip() or DEFAULT_NOTE_TITLE,
            content={},
            type=DocumentType.NOTE,
        )
        await self.db.commit()
        logger.info(f"{__name__}:create_note - document_id={document.id} owner_id={owner_id}")
        return document

    async def list_notes(self, owner_id: UUID) -> Sequence[DocumentModel]:
        """List the owner's documents, most recently updated first."""
        return await self._crud.get_by_owner(self.db, owner_id)

    async def get_owned(self, document_id: UUID, owner_id: UUID) -> DocumentModel:
        """
        Load a document the caller owns.

        Raises:
            NotFoundError: Document does not exist
            AuthorizationError: Document belongs to someone else
        """
        document = await self._crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError(str(document_id))
        if document.owner_id != owner_id:
            raise AuthorizationError(document_id=str(document_id))
        return document

    async def update_note(
        self,
        document_id: UUID,
        owner_id: UUID,
        changes: dict[str, Any],
    ) -> tuple[DocumentModel, bool]:
        """
        Apply title/content changes.

        Args:
            document_id: Document to update
            owner_id: Caller
            changes: Subset of {"title", "content"}

        Returns:
            tuple: (updated document, whether content changed and a reindex is due)
        """
        document = await self.get_owned(document_id, owner_id)

        content_changed = False
        for field in UPDATABLE_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            if field == "title":
                value = (value or "").strip() or DEFAULT_NOTE_TITLE
            if getattr(document, field) != value:
                setattr(document, field, value)
                content_changed = content_changed or field == "content"

        await self.db.commit()
        await self.db.refresh(document)
        return document, content_changed

    async def delete_note(self, document_id: UUID, owner_id: UUID) -> None:
        """Delete a document and every chunk derived from it."""
        await self.get_owned(document_id, owner_id)
        try:
            removed = await self._chunk_store.delete_for_document(self.db, document_id)
            await self._crud.delete_by_id(self.db, document_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"{__name__}:delete_note - document_id={document_id} chunks_removed={removed}")

    async def reindex(
        self,
        document_id: UUID,
        owner_id: UUID,
        supplemental_text: str | None = None,
    ) -> IndexResult:
        """Rebuild a document's index now."""
        return await self._indexer.reindex(self.db, document_id, owner_id, supplemental_text)

    async def upload_pdf(
        self,
        owner_id: UUID,
        filename: str | None,
        content_type: str | None,
        data: bytes,
        title: str | None = None,
    ) -> tuple[DocumentModel, IndexResult]:
        """
        Create and index a document from an uploaded PDF.

        Steps:
        1. Validate type and size (before any provider call)
        2. Extract per-page text
        3. Create the document
        4. Index synchronously; on any failure (including cancellation) delete
           the document and re-raise

        Returns:
            tuple: (created document, index result)

        Raises:
            ValidationError: Not a PDF, empty, too large, unreadable or textless
            EmbeddingFailure: Indexing failed, document removed
            QuotaExceeded: Provider rate limit, document removed
        """
        if not is_pdf_upload(filename, content_type):
            raise ValidationError("Only PDF files are supported", field="file")
        if not data:
            raise ValidationError("PDF file is required", field="file")
        if len(data) > self._max_upload_bytes:
            raise ValidationError(
                "File too large",
                field="file",
                details={"max_bytes": self._max_upload_bytes, "received_bytes": len(data)},
            )

        pages = extract_pdf_pages(data)
        if not pages:
            raise ValidationError("Unable to extract text from PDF", field="file")

        name = filename or "upload.pdf"
        derived_title = name[:-4] if name.lower().endswith(".pdf") else name
        document = await self._crud.create(
            self.db,
            owner_id=owner_id,
            title=(title or "").strip() or derived_title.strip() or DEFAULT_PDF_TITLE,
            content=build_pdf_content(name, pages),
            type=DocumentType.PDF,
        )
        await self.db.commit()
        document_id = document.id

        try:
            result = await self._indexer.index_new_document(self.db, document)
        except BaseException as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:upload_pdf - indexing failed, removing document",
                document_id=document_id,
                owner_id=owner_id,
                error_kind=getattr(e, "kind", type(e).__name__),
            )
            await self._remove_upload(document_id)
            raise

        await self.db.refresh(document)
        logger.info(
            f"{__name__}:upload_pdf - document_id={document_id} pages={len(pages)} "
            f"chunks={result.chunks_created}"
        )
        return document, result

    async def _remove_upload(self, document_id: UUID) -> None:
        """Delete a just-created upload whose indexing did not complete."""
        await self.db.rollback()
        await self._chunk_store.delete_for_document(self.db, document_id)
        await self._crud.delete_by_id(self.db, document_id)
        await self.db.commit()
