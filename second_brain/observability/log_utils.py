"""
Structured logging helpers.

Context is attached to records through ``extra`` and rendered after the
message by ``ContextFormatter`` (see logger.py), for example::

    ... ERROR - [3f2a...] Background reindex failed | document_id=... owner_id=... error_type=EmbeddingFailure

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_VALUE_LENGTH = 200

# Attributes present on every LogRecord, plus ones set by formatters, filters
# and uvicorn; anything else on a record was passed through extra=
_BUILTIN_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName", "correlation_id", "color_message"}


def render_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render one context value as a short log token.

    Collections are summarized by size rather than dumped.
    """
    if isinstance(value, (list, tuple, set)):
        text = f"<{len(value)} items>"
    elif isinstance(value, dict):
        text = f"<{len(value)} keys>"
    else:
        text = str(value)
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Fields a record received through extra=, in insertion order."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _BUILTIN_RECORD_ATTRS and not key.startswith("_")
    }


def format_context(context: dict[str, Any]) -> str:
    return " ".join(f"{key}={render_value(value)}" for key, value in context.items())


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log message with structured context (document_id, owner_id, ...).

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields rendered after the message
    """
    logger.log(level, message, extra=context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log a failure with its traceback, the error type and message, and context.

    Used where an error is handled without being re-raised (background
    reindex passes), so the log line is the only trace of it.
    """
    context.update(error_type=type(exc).__name__, error=str(exc))
    logger.error(message, exc_info=exc, extra=context)
