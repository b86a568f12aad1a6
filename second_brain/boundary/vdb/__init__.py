"""
Chunk vector index.

Exports:
  - ChunkStore: Owner-scoped chunk persistence and similarity search
  - ChunkRecord, RetrievedChunk, ChunkMetadata: Schemas
"""

from second_brain.boundary.vdb.chunk_store import ChunkStore
from second_brain.boundary.vdb.vector_schemas import ChunkMetadata, ChunkRecord, RetrievedChunk

__all__ = ["ChunkStore", "ChunkRecord", "RetrievedChunk", "ChunkMetadata"]
