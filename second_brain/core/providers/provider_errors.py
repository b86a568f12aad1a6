"""
Provider error mapping.

Translates exceptions raised by the Google client libraries into the
application taxonomy. Rate limiting is detected from structured fields the
client libraries expose (HTTP/gRPC status codes, ``RESOURCE_EXHAUSTED``
status, ``RetryInfo.retryDelay`` in the error payload), never from the
wording of the message.

Dependencies: asyncio, second_brain.core.exceptions
System role: Error boundary for all external AI calls
"""

import asyncio
import logging
import re
from collections.abc import Awaitable
from typing import Any, TypeVar

from second_brain.core.exceptions import ProviderError, QuotaExceeded

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTTP_TOO_MANY_REQUESTS = 429
RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
_MAX_CHAIN_DEPTH = 8
_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*s?\s*$")


def _iter_exception_chain(exc: BaseException):
    """Yield exc and its causes/contexts, most specific first."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen and len(seen) < _MAX_CHAIN_DEPTH:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _status_name(exc: BaseException) -> str | None:
    status = getattr(exc, "status", None)
    if isinstance(status, str):
        return status
    grpc_code = getattr(exc, "grpc_status_code", None)
    return getattr(grpc_code, "name", None)


def _http_code(exc: BaseException) -> int | None:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def _parse_duration(value: Any) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _DURATION_RE.match(value)
        if match:
            return float(match.group(1))
    return None


def _find_retry_delay(payload: Any, depth: int = 0) -> float | None:
    """Search a decoded error payload for a RetryInfo.retryDelay value."""
    if depth > 6:
        return None
    if isinstance(payload, dict):
        for key in ("retryDelay", "retry_delay"):
            if key in payload:
                delay = _parse_duration(payload[key])
                if delay is not None:
                    return delay
        payload = list(payload.values())
    if isinstance(payload, (list, tuple)):
        for item in payload:
            delay = _find_retry_delay(item, depth + 1)
            if delay is not None:
                return delay
    return None


def _retry_after(exc: BaseException) -> float | None:
    for attr in ("details", "response_json"):
        delay = _find_retry_delay(getattr(exc, attr, None))
        if delay is not None:
            return delay
    headers = getattr(getattr(exc, "response", None), "headers", None)
    if headers is not None:
        try:
            return _parse_duration(headers.get("retry-after"))
        except AttributeError:
            return None
    return None


def is_rate_limited(exc: BaseException) -> bool:
    """Whether any exception in the chain reports a provider rate limit."""
    for item in _iter_exception_chain(exc):
        if isinstance(item, QuotaExceeded):
            return True
        if _http_code(item) == HTTP_TOO_MANY_REQUESTS or _status_name(item) == RESOURCE_EXHAUSTED:
            return True
    return False


def classify_provider_error(
    exc: BaseException,
    failure_cls: type[ProviderError],
    operation: str,
) -> ProviderError:
    """
    Map a client-library exception to the application taxonomy.

    Args:
        exc: Exception raised by the provider client
        failure_cls: Class used for non rate-limit failures
        operation: Name of the provider operation, for messages and logs

    Returns:
        ProviderError: QuotaExceeded for rate limits, failure_cls otherwise
    """
    for item in _iter_exception_chain(exc):
        if isinstance(item, ProviderError):
            return item
        if _http_code(item) == HTTP_TOO_MANY_REQUESTS or _status_name(item) == RESOURCE_EXHAUSTED:
            retry_after = _retry_after(item)
            return QuotaExceeded(
                f"AI provider rate limit reached during {operation}",
                retry_after=retry_after,
                details={"operation": operation},
            )

    return failure_cls(
        f"{operation} failed: {type(exc).__name__}",
        details={"operation": operation, "error": str(exc)[:500]},
    )


async def call_provider(
    call: Awaitable[T],
    *,
    timeout: float,
    failure_cls: type[ProviderError],
    operation: str,
) -> T:
    """
    Await a provider call under a timeout and translate its failures.

    Cancellation of the calling task propagates into the provider call.

    Args:
        call: Awaitable provider call
        timeout: Seconds before the call is cancelled
        failure_cls: Exception class for generic failures
        operation: Operation name for messages and logs

    Returns:
        The provider call's result

    Raises:
        QuotaExceeded: Provider rate limit
        ProviderError: failure_cls instance for timeouts and other failures
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"{__name__}:call_provider - {operation} timed out after {timeout}s")
        raise failure_cls(
            f"{operation} timed out after {timeout}s",
            details={"operation": operation, "timeout_seconds": timeout},
        ) from e
    except ProviderError:
        raise
    except Exception as e:
        mapped = classify_provider_error(e, failure_cls, operation)
        logger.warning(
            f"{__name__}:call_provider - {operation} failed: {type(e).__name__} -> {mapped.kind}"
        )
        raise mapped from e
