"""
Exception hierarchy for SecondBrain.

Provides layered exception structure for domain-specific errors.
Every exception carries a stable machine-checkable ``kind`` plus a human
message, and optional context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SecondBrainException(Exception):
    """Base exception for all SecondBrain application errors."""

    kind: str = "internal_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(SecondBrainException):
    """Raised when input validation fails, before any external call."""

    kind = "validation_error"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AuthorizationError(SecondBrainException):
    """Raised when a caller touches a document owned by someone else."""

    kind = "authorization_error"

    def __init__(
        self,
        message: str = "Not authorized to access this document",
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class NotFoundError(SecondBrainException):
    """Raised when a document cannot be found."""

    kind = "not_found"

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class ProviderError(SecondBrainException):
    """Base exception for failures of the external AI provider."""

    kind = "provider_error"


class EmbeddingFailure(ProviderError):
    """Raised when an embedding call fails. Callers must not index or search with it."""

    kind = "embedding_failure"


class GenerationFailure(ProviderError):
    """Raised when a generator call fails for a reason other than rate limiting."""

    kind = "generation_failure"


class QuotaExceeded(ProviderError):
    """Raised when the provider rejects a call because of its rate limit."""

    kind = "quota_exceeded"

    def __init__(
        self,
        message: str = "AI provider quota exceeded",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize quota error.

        Args:
            message: Error message
            retry_after: Seconds the provider asked callers to wait, if known
            details: Additional context
        """
        details = details or {}
        if retry_after is not None:
            details["retry_after"] = retry_after
        self.retry_after = retry_after
        super().__init__(message, details)


class MalformedProviderOutput(ProviderError):
    """Raised when structured provider output does not parse or has the wrong shape."""

    kind = "malformed_provider_output"

    def __init__(
        self,
        message: str,
        raw_output: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if raw_output is not None:
            details["raw_output"] = raw_output[:500]
        super().__init__(message, details)


class RateLimitExceeded(SecondBrainException):
    """Raised when a caller exceeds the local request budget."""

    kind = "rate_limited"

    def __init__(self, retry_after: float, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["retry_after"] = retry_after
        self.retry_after = retry_after
        super().__init__("Too many requests", details)
