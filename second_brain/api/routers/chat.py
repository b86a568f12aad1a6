"""Chat API endpoints.

Routes:
- POST /chat - Answer a question from the caller's notes

Dependencies: second_brain.application.services.query_service
System role: Question answering HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from second_brain.api.deps import enforce_rate_limit, get_owner_id, get_query_service
from second_brain.application.services import QueryService
from second_brain.models.chat import ChatRequest, ChatResponse, ChatSource

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse, dependencies=[Depends(enforce_rate_limit)])
async def chat(
    request: ChatRequest,
    owner_id: UUID = Depends(get_owner_id),
    service: QueryService = Depends(get_query_service),
) -> ChatResponse:
    """Answer a question using only the caller's indexed content.

    Returns:
        ChatResponse: Answer and the chunks used as context
    """
    result = await service.answer(owner_id, request.query)
    return ChatResponse(
        answer=result.answer,
        sources=[ChatSource.from_chunk(chunk) for chunk in result.sources],
    )
