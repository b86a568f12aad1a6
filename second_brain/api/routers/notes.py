"""
Note API endpoints.

Routes:
- POST /notes - Create an empty note
- GET /notes - List the caller's notes
- PUT /notes/{document_id} - Update title/content; content edits reindex in the background
- DELETE /notes/{document_id} - Delete a note and its chunks

Dependencies: second_brain.application.services.document_service
System role: Note CRUD HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Body, Depends, status

from second_brain.api.deps import get_document_service, get_owner_id, get_scheduler
from second_brain.application.services import DocumentService
from second_brain.core.indexing import ReindexScheduler
from second_brain.models.common import MessageResponse
from second_brain.models.note import NoteCreateRequest, NoteResponse, NoteUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreateRequest | None = Body(default=None),
    owner_id: UUID = Depends(get_owner_id),
    service: DocumentService = Depends(get_document_service),
) -> NoteResponse:
    """Create an empty note owned by the caller."""
    document = await service.create_note(owner_id, title=request.title if request else None)
    return NoteResponse.model_validate(document)


@router.get("", response_model=list[NoteResponse])
async def list_notes(
    owner_id: UUID = Depends(get_owner_id),
    service: DocumentService = Depends(get_document_service),
) -> list[NoteResponse]:
    documents = await service.list_notes(owner_id)
    return [NoteResponse.model_validate(document) for document in documents]


@router.put("/{document_id}", response_model=NoteResponse)
async def update_note(
    document_id: UUID,
    request: NoteUpdateRequest,
    background_tasks: BackgroundTasks,
    owner_id: UUID = Depends(get_owner_id),
    service: DocumentService = Depends(get_document_service),
    scheduler: ReindexScheduler = Depends(get_scheduler),
) -> NoteResponse:
    """
    Update a note.

    Only fields present in the body are applied. When the content changes a
    background reindex is scheduled after the response is sent.
    """
    changes = request.model_dump(include=request.model_fields_set)
    document, content_changed = await service.update_note(document_id, owner_id, changes)

    if content_changed:
        background_tasks.add_task(scheduler.schedule, document.id, owner_id)
        logger.info(f"{__name__}:update_note - reindex scheduled for document_id={document.id}")

    return NoteResponse.model_validate(document)


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_note(
    document_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    service: DocumentService = Depends(get_document_service),
) -> MessageResponse:
    await service.delete_note(document_id, owner_id)
    return MessageResponse(msg="Note removed")
