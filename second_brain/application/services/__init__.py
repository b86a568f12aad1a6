"""Service orchestrators."""

from .document_service import DocumentService
from .query_service import QueryAnswer, QueryService
from .visualize_service import VisualizeService

__all__ = [
    "DocumentService",
    "QueryAnswer",
    "QueryService",
    "VisualizeService",
]
