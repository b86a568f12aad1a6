"""
Models for document processing pipeline.

Exports: TextSegment, TextChunk, IndexResult
"""

from .chunk import TextChunk, TextSegment
from .index_result import IndexResult

__all__ = [
    "TextChunk",
    "TextSegment",
    "IndexResult",
]
