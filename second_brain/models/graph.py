"""
Visualization request/response schemas.

Dependencies: pydantic
System role: Knowledge graph API contracts
"""

from uuid import UUID

from pydantic import Field

from second_brain.core.knowledge_graph import GraphEdge, GraphNode
from second_brain.models.common import CamelModel


class VisualizeRequest(CamelModel):
    """Either an owned document id or raw text."""

    document_id: UUID | None = None
    text: str | None = Field(default=None, max_length=100_000)


class VisualizeResponse(CamelModel):
    nodes: list[GraphNode]
    edges: list[GraphEdge]
