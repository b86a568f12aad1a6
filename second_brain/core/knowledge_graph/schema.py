"""
Knowledge graph data structures.

Dependencies: pydantic
System role: Types for graph extraction and sanitization
"""

from typing import Literal

from pydantic import BaseModel, Field


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class GraphNode(BaseModel):
    id: str
    label: str
    position: Position = Field(default_factory=Position)


class GraphEdge(BaseModel):
    id: str
    source: str
    target: str
    label: str = ""


class KnowledgeGraph(BaseModel):
    """Graph returned to callers. Every edge references a node in nodes."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


class SanitizeDecision(BaseModel):
    """Why one provider item was kept or dropped."""

    item: Literal["node", "edge"]
    index: int
    kept: bool
    reason: str


class SanitizedGraph(BaseModel):
    """Sanitized graph plus the per-item decisions that produced it."""

    graph: KnowledgeGraph
    decisions: list[SanitizeDecision] = Field(default_factory=list)

    @property
    def dropped(self) -> list[SanitizeDecision]:
        return [decision for decision in self.decisions if not decision.kept]
