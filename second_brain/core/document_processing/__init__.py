"""
Document processing: text extraction, PDF parsing and chunking.
"""

from .chunker import TextChunker
from .models import IndexResult, TextChunk, TextSegment
from .text_extractor import extract_pages, extract_plain_text, normalize_whitespace

__all__ = [
    "TextChunker",
    "IndexResult",
    "TextChunk",
    "TextSegment",
    "extract_pages",
    "extract_plain_text",
    "normalize_whitespace",
]
