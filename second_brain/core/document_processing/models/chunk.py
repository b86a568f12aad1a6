"""
Chunk domain models for document processing pipeline.

Represents page-tagged text segments and the chunks cut from them.

Dependencies: pydantic
System role: Data structures passed between extractor, chunker and indexer
"""

from pydantic import BaseModel, Field


class TextSegment(BaseModel):
    """Contiguous run of normalized text with optional position metadata."""

    text: str = Field(description="Whitespace-normalized text")
    page_number: int | None = Field(default=None, description="Source page (PDFs only)")
    section_title: str | None = Field(default=None, description="Section heading, if known")


class TextChunk(BaseModel):
    """One overlapping window cut from a segment, before embedding."""

    text: str = Field(description="Chunk text content")
    position: int = Field(description="Ordinal of the chunk within its indexing pass")
    start_index: int = Field(default=0, description="Character offset within the segment")
    page_number: int | None = Field(default=None, description="Page number in source document")
    section_title: str | None = Field(default=None, description="Section heading or title")
