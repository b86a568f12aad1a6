"""
Indexing API endpoints.

Routes:
- POST /notes/{document_id}/ingest - Reindex a note now, with optional supplemental text
- POST /upload - Upload a PDF; creates a document and indexes it synchronously

Dependencies: second_brain.application.services.document_service
System role: Document ingestion HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile, status

from second_brain.api.deps import (
    ServiceContainer,
    enforce_rate_limit,
    get_container,
    get_document_service,
    get_owner_id,
)
from second_brain.application.services import DocumentService
from second_brain.models.ingest import IngestRequest, IngestResponse, UploadResponse
from second_brain.models.note import NoteResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingest"])


@router.post("/notes/{document_id}/ingest", response_model=IngestResponse)
async def ingest_note(
    document_id: UUID,
    request: IngestRequest | None = Body(default=None),
    owner_id: UUID = Depends(get_owner_id),
    service: DocumentService = Depends(get_document_service),
) -> IngestResponse:
    """Rebuild a note's index from its current content."""
    result = await service.reindex(
        document_id,
        owner_id,
        supplemental_text=request.text if request else None,
    )
    return IngestResponse(document_id=result.document_id, chunks_created=result.chunks_created)


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
)
async def upload_pdf(
    file: UploadFile = File(...),
    title: str | None = Form(default=None),
    owner_id: UUID = Depends(get_owner_id),
    service: DocumentService = Depends(get_document_service),
    container: ServiceContainer = Depends(get_container),
) -> UploadResponse:
    """
    Upload a PDF.

    Steps:
    1. Read at most max_upload_bytes + 1 bytes (oversized bodies are already
       refused by UploadSizeLimitMiddleware)
    2. Validate, extract, create and index through DocumentService

    Returns:
        UploadResponse: Created document and number of chunks
    """
    limit = container.settings.api.max_upload_bytes
    data = await file.read(limit + 1)
    logger.info(f"{__name__}:upload_pdf - filename={file.filename} size={len(data)}")

    document, result = await service.upload_pdf(
        owner_id=owner_id,
        filename=file.filename,
        content_type=file.content_type,
        data=data,
        title=title,
    )
    return UploadResponse(
        document=NoteResponse.model_validate(document),
        chunks_created=result.chunks_created,
    )
