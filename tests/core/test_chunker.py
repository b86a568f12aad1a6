"""
Test suite for TextChunker.

System role: Verification of deterministic chunking
"""

import pytest

from second_brain.core.document_processing import TextChunker, TextSegment


class TestChunkerConfiguration:
    def test_overlap_equal_to_size_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            TextChunker(chunk_size=100, chunk_overlap=100)

    def test_overlap_larger_than_size_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            TextChunker(chunk_size=100, chunk_overlap=150)

    def test_non_positive_size_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            TextChunker(chunk_size=0, chunk_overlap=0)


class TestChunkerSplit:
    def test_empty_and_whitespace_input_yield_no_chunks(self) -> None:
        chunker = TextChunker()

        assert chunker.split("") == []
        assert chunker.split("   \n\t ") == []

    def test_short_text_is_single_chunk(self) -> None:
        chunks = TextChunker().split("Gemini is a model family.")

        assert len(chunks) == 1
        assert chunks[0].text == "Gemini is a model family."
        assert chunks[0].position == 0

    def test_chunks_respect_size_and_are_numbered(self) -> None:
        text = " ".join(f"Sentence number {i} talks about topic {i}." for i in range(200))
        chunker = TextChunker(chunk_size=200, chunk_overlap=40)

        chunks = chunker.split(text)

        assert len(chunks) > 1
        assert all(len(chunk.text) <= 200 for chunk in chunks)
        assert [chunk.position for chunk in chunks] == list(range(len(chunks)))

    def test_unbroken_text_is_hard_cut(self) -> None:
        chunks = TextChunker(chunk_size=50, chunk_overlap=10).split("x" * 175)

        assert all(len(chunk.text) <= 50 for chunk in chunks)
        assert len(chunks) >= 4

    def test_split_is_deterministic(self) -> None:
        text = "Alpha beta gamma. " * 300
        first = TextChunker(chunk_size=120, chunk_overlap=30).split(text)
        second = TextChunker(chunk_size=120, chunk_overlap=30).split(text)

        assert [c.text for c in first] == [c.text for c in second]


class TestSplitSegments:
    def test_page_metadata_is_carried_and_positions_continue(self) -> None:
        chunker = TextChunker(chunk_size=100, chunk_overlap=20)
        segments = [
            TextSegment(text="Page one text. " * 12, page_number=1),
            TextSegment(text="", page_number=2),
            TextSegment(text="Page three text.", page_number=3, section_title="Intro"),
        ]

        chunks = chunker.split_segments(segments)

        assert {chunk.page_number for chunk in chunks} == {1, 3}
        assert [chunk.position for chunk in chunks] == list(range(len(chunks)))
        last = chunks[-1]
        assert last.page_number == 3
        assert last.section_title == "Intro"
