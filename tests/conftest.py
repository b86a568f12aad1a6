"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, deterministic fake embedding gateway and
answer generator, document factory, minimal PDF builder
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import hashlib
import re
import uuid
from typing import Any

import pytest

EMBEDDING_DIMENSION = 64


class FakeEmbeddingGateway:
    """Deterministic hashed bag-of-words embeddings."""

    def __init__(self, dimension: int = EMBEDDING_DIMENSION) -> None:
        self.dimension = dimension
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []
        self.fail_with: Exception | None = None

    def vector(self, text: str) -> list[float]:
        values = [0.0] * self.dimension
        for token in re.findall(r"\w+", text.lower()):
            index = int(hashlib.md5(token.encode()).hexdigest(), 16) % self.dimension
            values[index] += 1.0
        return values

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        if self.fail_with is not None:
            raise self.fail_with
        self.document_calls.append(list(texts))
        return [self.vector(text) for text in texts]

    async def embed_document(self, text: str) -> list[float]:
        return (await self.embed_documents([text]))[0]

    async def embed_query(self, text: str) -> list[float]:
        if self.fail_with is not None:
            raise self.fail_with
        self.query_calls.append(text)
        return self.vector(text)


class FakeAnswerGenerator:
    """Records calls and returns canned output."""

    def __init__(self, answer: str = "Fake answer", structured_output: str = '{"nodes": [], "edges": []}') -> None:
        self.answer = answer
        self.structured_output = structured_output
        self.generate_calls: list[tuple[str, str]] = []
        self.structured_calls: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None

    async def generate(self, query: str, context: str) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self.generate_calls.append((query, context))
        return self.answer

    async def generate_structured(self, instructions: str, text: str) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self.structured_calls.append((instructions, text))
        return self.structured_output


def build_note_content(*paragraphs: str) -> dict[str, Any]:
    """Editor-style content tree with one paragraph block per argument."""
    return {
        "type": "doc",
        "blocks": [
            {"type": "paragraph", "content": [{"type": "text", "text": paragraph}]}
            for paragraph in paragraphs
        ],
    }


def build_pdf(pages: list[str]) -> bytes:
    """Build a small valid PDF with one line of Helvetica text per page."""
    objects: list[bytes] = []
    page_count = len(pages)
    font_id = 3 + 2 * page_count

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    for i, text in enumerate(pages):
        content_id = 4 + 2 * i
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {content_id} 0 R >>"
            ).encode()
        )
        escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        stream = f"BT /F1 12 Tf 72 720 Td ({escaped}) Tj ET".encode()
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)


@pytest.fixture
async def session_factory():
    """
    In-memory SQLite session factory shared by a test.

    Yields:
        async_sessionmaker: Factory bound to a fresh schema
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from second_brain.boundary.db import models  # noqa: F401
    from second_brain.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_async_db(session_factory):
    """
    Async session on the in-memory database.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fake_embeddings() -> FakeEmbeddingGateway:
    return FakeEmbeddingGateway()


@pytest.fixture
def fake_generator() -> FakeAnswerGenerator:
    return FakeAnswerGenerator()


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def other_owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def make_document(test_async_db):
    """Factory creating committed documents."""
    from second_brain.boundary.db.CRUD import DocumentCRUD
    from second_brain.boundary.db.models import DocumentType

    crud = DocumentCRUD()

    async def _make(owner_id: uuid.UUID, *paragraphs: str, title: str = "Note", content: Any = None):
        document = await crud.create(
            test_async_db,
            owner_id=owner_id,
            title=title,
            content=content if content is not None else build_note_content(*paragraphs),
            type=DocumentType.NOTE,
        )
        await test_async_db.commit()
        return document

    return _make


@pytest.fixture
def note_content():
    """Builder for editor-style content trees."""
    return build_note_content


@pytest.fixture
def make_pdf():
    """Builder for minimal text PDFs."""
    return build_pdf
