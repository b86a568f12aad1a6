"""
Embedding gateway backed by Google Generative AI embeddings.

Documents and queries are embedded with different task types
(RETRIEVAL_DOCUMENT / RETRIEVAL_QUERY) into the same similarity space, always
at the configured output dimensionality.

Dependencies: langchain_google_genai, second_brain.core.providers.provider_errors
System role: Capability boundary text -> vector
"""

import logging
from typing import Protocol, runtime_checkable

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from second_brain.core.exceptions import EmbeddingFailure
from second_brain.core.providers.provider_errors import call_provider

logger = logging.getLogger(__name__)

# GOOGLE_API_KEY from .env for clients built without an explicit key
load_dotenv()

DOCUMENT_TASK_TYPE = "RETRIEVAL_DOCUMENT"
QUERY_TASK_TYPE = "RETRIEVAL_QUERY"


@runtime_checkable
class EmbeddingGateway(Protocol):
    """Text to fixed-dimension vector, in document and query modes."""

    dimension: int

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of chunk texts for indexing."""
        ...

    async def embed_document(self, text: str) -> list[float]:
        """Embed one chunk text for indexing."""
        ...

    async def embed_query(self, text: str) -> list[float]:
        """Embed a search query."""
        ...


class GeminiEmbeddingGateway:
    """
    Embedding gateway over GoogleGenerativeAIEmbeddings with fixed dimensionality.

    The client is built once and reused; every call passes the task type and
    output dimensionality explicitly.
    """

    def __init__(
        self,
        model: str = "models/text-embedding-004",
        dimension: int = 768,
        google_api_key: str | None = None,
        timeout_seconds: float = 30.0,
        batch_size: int = 100,
        client: GoogleGenerativeAIEmbeddings | None = None,
    ) -> None:
        """
        Initialize embedding gateway.

        Args:
            model: Google embedding model ID
            dimension: Output dimension for all embeddings
            google_api_key: API key (falls back to GOOGLE_API_KEY env var)
            timeout_seconds: Upper bound per provider call
            batch_size: Texts per embedding request
            client: Pre-built client (tests)
        """
        if dimension <= 0:
            raise ValueError("dimension must be positive")

        self.dimension = dimension
        self._timeout = timeout_seconds
        self._batch_size = batch_size
        if client is None:
            kwargs = {"model": model}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            client = GoogleGenerativeAIEmbeddings(**kwargs)
        self._client = client

        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, dimension={dimension}"
        )

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Embed chunk texts for indexing.

        Args:
            texts: Chunk texts

        Returns:
            list[list[float]]: One vector per text, in order

        Raises:
            EmbeddingFailure: On provider error, timeout, or malformed vectors
            QuotaExceeded: On provider rate limit
        """
        if not texts:
            return []

        vectors = await call_provider(
            self._client.aembed_documents(
                texts,
                batch_size=self._batch_size,
                task_type=DOCUMENT_TASK_TYPE,
                output_dimensionality=self.dimension,
            ),
            timeout=self._timeout,
            failure_cls=EmbeddingFailure,
            operation="embed_documents",
        )
        if len(vectors) != len(texts):
            raise EmbeddingFailure(
                "Embedding count does not match input count",
                details={"expected": len(texts), "received": len(vectors)},
            )
        return [self._check(vector) for vector in vectors]

    async def embed_document(self, text: str) -> list[float]:
        """Embed one chunk text for indexing."""
        vectors = await self.embed_documents([text])
        return vectors[0]

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query.

        Args:
            text: Query text

        Returns:
            list[float]: Query vector

        Raises:
            EmbeddingFailure: On provider error, timeout, or malformed vector
            QuotaExceeded: On provider rate limit
        """
        vector = await call_provider(
            self._client.aembed_query(
                text,
                task_type=QUERY_TASK_TYPE,
                output_dimensionality=self.dimension,
            ),
            timeout=self._timeout,
            failure_cls=EmbeddingFailure,
            operation="embed_query",
        )
        return self._check(vector)

    def _check(self, vector: list[float]) -> list[float]:
        if not vector or len(vector) != self.dimension:
            raise EmbeddingFailure(
                "Embedding has unexpected dimension",
                details={"expected": self.dimension, "received": len(vector or [])},
            )
        return [float(value) for value in vector]
