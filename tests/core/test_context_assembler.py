"""
Test suite for ContextAssembler.

System role: Verification of bounded context construction
"""

import uuid

import pytest

from second_brain.boundary.vdb import ChunkMetadata, RetrievedChunk
from second_brain.core.retrieval import ContextAssembler


def chunk(text: str, score: float = 0.5) -> RetrievedChunk:
    return RetrievedChunk(
        chunk_id=uuid.uuid4(),
        document_id=uuid.uuid4(),
        text=text,
        score=score,
        metadata=ChunkMetadata(owner_id=uuid.uuid4()),
    )


def test_joins_in_order_with_delimiter() -> None:
    context = ContextAssembler(char_budget=100).assemble([chunk("first"), chunk("second")])

    assert context.text == "first\n---\nsecond"
    assert len(context.used) == 2


def test_stops_before_exceeding_budget() -> None:
    results = [chunk("a" * 40), chunk("b" * 40), chunk("c" * 40)]

    context = ContextAssembler(char_budget=100, delimiter="|").assemble(results)

    assert context.text == "a" * 40 + "|" + "b" * 40
    assert [c.text[0] for c in context.used] == ["a", "b"]
    assert len(context.text) <= 100


def test_oversized_first_chunk_is_truncated() -> None:
    context = ContextAssembler(char_budget=10).assemble([chunk("x" * 50), chunk("y")])

    assert context.text == "x" * 10
    assert len(context.used) == 1


def test_empty_results() -> None:
    context = ContextAssembler().assemble([])

    assert context.text == ""
    assert context.is_empty


def test_budget_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ContextAssembler(char_budget=0)
