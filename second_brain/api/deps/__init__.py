"""FastAPI dependencies."""

from .dependencies import (
    OWNER_HEADER,
    ServiceContainer,
    enforce_rate_limit,
    get_container,
    get_document_service,
    get_owner_id,
    get_query_service,
    get_scheduler,
    get_visualize_service,
)

__all__ = [
    "OWNER_HEADER",
    "ServiceContainer",
    "enforce_rate_limit",
    "get_container",
    "get_document_service",
    "get_owner_id",
    "get_query_service",
    "get_scheduler",
    "get_visualize_service",
]
