"""
Test suite for chat API endpoint.

Tests POST /chat with FastAPI TestClient. Covers answers with sources,
request validation, provider error mapping and rate limiting.

System role: Verification of chat HTTP API endpoint
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from second_brain.api.deps import get_query_service
from second_brain.application.services import QueryAnswer
from second_brain.boundary.vdb import ChunkMetadata, RetrievedChunk
from second_brain.core.exceptions import EmbeddingFailure, GenerationFailure, QuotaExceeded
from second_brain.core.retrieval import NO_RELEVANT_CONTENT_ANSWER


@pytest.fixture
def query_service(app) -> AsyncMock:
    service = AsyncMock()
    app.dependency_overrides[get_query_service] = lambda: service
    return service


@pytest.fixture
def sample_chunk(owner_id) -> RetrievedChunk:
    return RetrievedChunk(
        chunk_id=uuid.uuid4(),
        document_id=uuid.uuid4(),
        text="Gemini is a family of multimodal models.",
        score=0.91,
        metadata=ChunkMetadata(owner_id=owner_id, page_number=2),
    )


def test_chat_returns_answer_and_sources(client, headers, query_service, sample_chunk, owner_id) -> None:
    query_service.answer.return_value = QueryAnswer(answer="Gemini is multimodal.", sources=[sample_chunk])

    response = client.post("/api/v1/chat", json={"query": "What is Gemini?"}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == "Gemini is multimodal."
    source = body["sources"][0]
    assert source["documentId"] == str(sample_chunk.document_id)
    assert source["text"] == sample_chunk.text
    assert source["score"] == pytest.approx(0.91)
    assert source["metadata"] == {"ownerId": str(owner_id), "pageNumber": 2, "sectionTitle": None}
    query_service.answer.assert_awaited_once_with(owner_id, "What is Gemini?")


def test_chat_with_no_content(client, headers, query_service) -> None:
    query_service.answer.return_value = QueryAnswer(answer=NO_RELEVANT_CONTENT_ANSWER)

    response = client.post("/api/v1/chat", json={"query": "Anything?"}, headers=headers)

    assert response.json() == {"answer": NO_RELEVANT_CONTENT_ANSWER, "sources": []}


@pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": "x" * 4001}])
def test_invalid_query_is_rejected(client, headers, query_service, payload) -> None:
    response = client.post("/api/v1/chat", json=payload, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["kind"] == "validation_error"
    query_service.answer.assert_not_awaited()


def test_quota_exceeded_returns_429_with_retry_after(client, headers, query_service) -> None:
    query_service.answer.side_effect = QuotaExceeded(retry_after=12.3)

    response = client.post("/api/v1/chat", json={"query": "What is Gemini?"}, headers=headers)

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "13"
    assert response.json()["error"]["kind"] == "quota_exceeded"


@pytest.mark.parametrize(
    "error, kind",
    [
        (EmbeddingFailure("embed_query failed: RuntimeError"), "embedding_failure"),
        (GenerationFailure("generate failed: RuntimeError"), "generation_failure"),
    ],
)
def test_provider_failures_are_bad_gateway(client, headers, query_service, error, kind) -> None:
    query_service.answer.side_effect = error

    response = client.post("/api/v1/chat", json={"query": "What is Gemini?"}, headers=headers)

    assert response.status_code == 502
    assert response.json()["error"]["kind"] == kind


def test_chat_is_rate_limited_per_owner(client, headers, query_service) -> None:
    query_service.answer.return_value = QueryAnswer(answer="ok")

    statuses = [
        client.post("/api/v1/chat", json={"query": "q"}, headers=headers).status_code
        for _ in range(4)
    ]
    other = client.post("/api/v1/chat", json={"query": "q"}, headers={"X-Owner-Id": str(uuid.uuid4())})

    assert statuses == [200, 200, 200, 429]
    assert other.status_code == 200
    assert query_service.answer.await_count == 4
