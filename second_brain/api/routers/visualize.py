"""
Visualization API endpoints.

Routes:
- POST /visualize - Knowledge graph for an owned note or raw text

Dependencies: second_brain.application.services.visualize_service
System role: Knowledge graph HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from second_brain.api.deps import enforce_rate_limit, get_owner_id, get_visualize_service
from second_brain.application.services import VisualizeService
from second_brain.models.graph import VisualizeRequest, VisualizeResponse

router = APIRouter(tags=["visualize"])


@router.post("/visualize", response_model=VisualizeResponse, dependencies=[Depends(enforce_rate_limit)])
async def visualize(
    request: VisualizeRequest,
    owner_id: UUID = Depends(get_owner_id),
    service: VisualizeService = Depends(get_visualize_service),
) -> VisualizeResponse:
    graph = await service.visualize(owner_id, document_id=request.document_id, text=request.text)
    return VisualizeResponse(nodes=graph.nodes, edges=graph.edges)
