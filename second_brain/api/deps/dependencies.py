"""
Dependency injection container.

The ServiceContainer holds the process-wide components (model clients,
indexer, scheduler, rate limiter). It is built once in the app lifespan,
stored on app.state, and per-request services are assembled from it.

Dependencies: fastapi, second_brain.configs, second_brain.application, second_brain.core
System role: DI container for service injection
"""

from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from second_brain.api.rate_limit import FixedWindowRateLimiter
from second_brain.application.services import DocumentService, QueryService, VisualizeService
from second_brain.boundary.db import get_async_db
from second_brain.boundary.vdb import ChunkStore
from second_brain.configs import Settings
from second_brain.core.document_processing import TextChunker
from second_brain.core.exceptions import AuthorizationError, ValidationError
from second_brain.core.indexing import Indexer, ReindexScheduler, session_scoped_pass
from second_brain.core.knowledge_graph import KnowledgeGraphExtractor
from second_brain.core.providers import (
    AnswerGenerator,
    EmbeddingGateway,
    GeminiAnswerGenerator,
    GeminiEmbeddingGateway,
)
from second_brain.core.retrieval import ContextAssembler, Retriever

OWNER_HEADER = "X-Owner-Id"


class ServiceContainer:
    """Container for shared service components."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        embeddings: EmbeddingGateway | None = None,
        generator: AnswerGenerator | None = None,
    ) -> None:
        """
        Build all shared components.

        Args:
            settings: Application settings
            session_factory: Factory for background sessions
            embeddings: Embedding gateway (Gemini when None)
            generator: Answer generator (Gemini when None)
        """
        provider = settings.provider
        indexing = settings.indexing

        self.settings = settings
        self.embeddings = embeddings or GeminiEmbeddingGateway(
            model=provider.embedding_model,
            dimension=provider.embedding_dimension,
            google_api_key=provider.google_api_key,
            timeout_seconds=provider.timeout_seconds,
        )
        self.generator = generator or GeminiAnswerGenerator(
            model_id=provider.chat_model,
            temperature=provider.temperature,
            max_output_tokens=provider.max_output_tokens,
            google_api_key=provider.google_api_key,
            timeout_seconds=provider.timeout_seconds,
        )
        self.chunk_store = ChunkStore()
        self.indexer = Indexer(
            embeddings=self.embeddings,
            chunker=TextChunker(indexing.chunk_size, indexing.chunk_overlap),
            chunk_store=self.chunk_store,
        )
        self.retriever = Retriever(
            embeddings=self.embeddings,
            chunk_store=self.chunk_store,
            oversample_factor=indexing.oversample_factor,
        )
        self.assembler = ContextAssembler(char_budget=indexing.context_char_budget)
        self.graph_extractor = KnowledgeGraphExtractor(
            self.generator,
            min_text_length=indexing.min_graph_text_length,
        )
        self.scheduler = ReindexScheduler(session_scoped_pass(self.indexer, session_factory))
        self.rate_limiter = FixedWindowRateLimiter(
            max_requests=settings.api.rate_limit_requests,
            window_seconds=settings.api.rate_limit_window_seconds,
        )


def get_container(request: Request) -> ServiceContainer:
    """Get the container built at startup."""
    return request.app.state.services


def get_owner_id(x_owner_id: str | None = Header(default=None, alias=OWNER_HEADER)) -> UUID:
    """
    Caller identity from the upstream auth layer.

    Raises:
        AuthorizationError: Header missing
        ValidationError: Header is not a UUID
    """
    if not x_owner_id:
        raise AuthorizationError("Missing caller identity")
    try:
        return UUID(x_owner_id)
    except ValueError as e:
        raise ValidationError("Invalid owner id", field=OWNER_HEADER) from e


async def enforce_rate_limit(request: Request, container: ServiceContainer = Depends(get_container)) -> None:
    """Count the request against the caller's window (owner id, else client host)."""
    key = request.headers.get(OWNER_HEADER) or (request.client.host if request.client else "anonymous")
    container.rate_limiter.hit(key)


def get_scheduler(container: ServiceContainer = Depends(get_container)) -> ReindexScheduler:
    return container.scheduler


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    container: ServiceContainer = Depends(get_container),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        container: Shared components

    Returns:
        DocumentService: Document service bound to this request's session
    """
    return DocumentService(
        db=db,
        indexer=container.indexer,
        chunk_store=container.chunk_store,
        max_upload_bytes=container.settings.api.max_upload_bytes,
    )


def get_query_service(
    db: AsyncSession = Depends(get_async_db),
    container: ServiceContainer = Depends(get_container),
) -> QueryService:
    """Get query service instance."""
    return QueryService(
        db=db,
        retriever=container.retriever,
        assembler=container.assembler,
        generator=container.generator,
        top_k=container.settings.indexing.top_k,
    )


def get_visualize_service(
    db: AsyncSession = Depends(get_async_db),
    container: ServiceContainer = Depends(get_container),
) -> VisualizeService:
    return VisualizeService(db=db, extractor=container.graph_extractor)
