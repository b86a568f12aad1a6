"""
Index result model for document indexing.

Represents the outcome of indexing one document.

Dependencies: pydantic
System role: Return type for Indexer.reindex()
"""

import uuid

from pydantic import BaseModel, Field


class IndexResult(BaseModel):
    """Result of one indexing pass."""

    document_id: uuid.UUID = Field(description="Indexed document identifier")
    chunks_created: int = Field(description="Number of chunks now indexed for the document")
    processing_time_ms: float = Field(default=0.0, description="Total processing time in milliseconds")
