"""
Text chunking using RecursiveCharacterTextSplitter.

Splits normalized text into overlapping windows, preferring paragraph and
sentence boundaries before falling back to a hard cut at the chunk size.

Dependencies: langchain_text_splitters
System role: Second stage of document indexing
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from .models import TextChunk, TextSegment

# Paragraph, line, sentence, word, character
SEPARATORS = ["\n\n", "\n", ". ", "? ", "! ", "; ", " ", ""]


class TextChunker:
    """Split text into deterministic overlapping chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunker with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: When sizes are not positive or overlap >= size
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            separators=SEPARATORS,
            keep_separator="end",
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            add_start_index=True,
            length_function=len,
        )

    def split(self, text: str) -> list[TextChunk]:
        """
        Split one text into chunks.

        Args:
            text: Normalized text

        Returns:
            list[TextChunk]: Ordered chunks, empty for empty input
        """
        return self.split_segments([TextSegment(text=text)])

    def split_segments(self, segments: list[TextSegment]) -> list[TextChunk]:
        """
        Split each segment independently, keeping its page/section metadata.

        Args:
            segments: Page-tagged segments in document order

        Returns:
            list[TextChunk]: Chunks numbered consecutively across segments
        """
        chunks: list[TextChunk] = []
        for segment in segments:
            if not segment.text.strip():
                continue
            for doc in self._splitter.create_documents([segment.text]):
                chunks.append(
                    TextChunk(
                        text=doc.page_content,
                        position=len(chunks),
                        start_index=doc.metadata.get("start_index", 0),
                        page_number=segment.page_number,
                        section_title=segment.section_title,
                    )
                )
        return chunks
