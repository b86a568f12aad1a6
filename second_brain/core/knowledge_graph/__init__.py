"""
Knowledge graph extraction and sanitization.
"""

from .extractor import KnowledgeGraphExtractor
from .sanitizer import minimal_graph, parse_graph_json, sanitize_graph
from .schema import GraphEdge, GraphNode, KnowledgeGraph, Position, SanitizedGraph, SanitizeDecision

__all__ = [
    "KnowledgeGraphExtractor",
    "minimal_graph",
    "parse_graph_json",
    "sanitize_graph",
    "GraphEdge",
    "GraphNode",
    "KnowledgeGraph",
    "Position",
    "SanitizedGraph",
    "SanitizeDecision",
]
