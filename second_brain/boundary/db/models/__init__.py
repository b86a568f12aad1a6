"""
Database models package.

Exports:
  - DocumentModel, DocumentType: Document ORM model and type enum
  - ChunkModel: Chunk ORM model

Dependencies: sqlalchemy, second_brain.boundary.db.base
System role: Database model definitions for domain entities
"""

from second_brain.boundary.db.models.chunk_model import ChunkModel
from second_brain.boundary.db.models.document_model import DocumentModel, DocumentType

__all__ = [
    "DocumentModel",
    "DocumentType",
    "ChunkModel",
]
