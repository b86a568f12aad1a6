"""
Answer generator backed by Google Gemini chat models.

Answers questions strictly from supplied context, and produces raw JSON for
structured extraction tasks.

Dependencies: langchain_google_genai, langchain_core, second_brain.core.providers
System role: Capability boundary (query, context) -> answer
"""

import logging
from typing import Any, Protocol, runtime_checkable

from langchain_google_genai import ChatGoogleGenerativeAI

from second_brain.core.exceptions import GenerationFailure
from second_brain.core.providers.prompts import ANSWER_PROMPT, GRAPH_PROMPT
from second_brain.core.providers.provider_errors import call_provider

logger = logging.getLogger(__name__)


@runtime_checkable
class AnswerGenerator(Protocol):
    """Grounded text generation."""

    async def generate(self, query: str, context: str) -> str:
        """Answer query using only context."""
        ...

    async def generate_structured(self, instructions: str, text: str) -> str:
        """Return raw JSON text produced for instructions over text."""
        ...


def content_to_text(content: Any) -> str:
    """
    Flatten chat model message content to a string.

    Handles both plain string content and lists of content parts.
    """
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str)
            else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


class GeminiAnswerGenerator:
    """Answer generator over ChatGoogleGenerativeAI."""

    def __init__(
        self,
        model_id: str = "gemini-flash-latest",
        temperature: float = 0.2,
        max_output_tokens: int = 2048,
        google_api_key: str | None = None,
        timeout_seconds: float = 30.0,
        chat_model: Any | None = None,
        json_model: Any | None = None,
    ) -> None:
        """
        Initialize generator with chat models.

        Args:
            model_id: Gemini model identifier
            temperature: Model temperature
            max_output_tokens: Output token cap
            google_api_key: API key (falls back to GOOGLE_API_KEY env var)
            timeout_seconds: Upper bound per provider call
            chat_model: Pre-built chat model (tests)
            json_model: Pre-built JSON-mode chat model (tests)
        """
        self._timeout = timeout_seconds
        kwargs: dict[str, Any] = {
            "model": model_id,
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }
        if google_api_key:
            kwargs["google_api_key"] = google_api_key

        self._model = chat_model or ChatGoogleGenerativeAI(**kwargs)
        self._json_model = json_model or ChatGoogleGenerativeAI(
            response_mime_type="application/json",
            **kwargs,
        )
        logger.info(f"{__name__}:__init__ - Initialized with model={model_id}")

    async def generate(self, query: str, context: str) -> str:
        """
        Answer a question from context only.

        Args:
            query: User question
            context: Assembled context passages

        Returns:
            str: Answer text

        Raises:
            QuotaExceeded: On provider rate limit
            GenerationFailure: On any other provider failure or empty answer
        """
        messages = ANSWER_PROMPT.invoke({"context": context, "question": query}).to_messages()
        response = await call_provider(
            self._model.ainvoke(messages),
            timeout=self._timeout,
            failure_cls=GenerationFailure,
            operation="generate_answer",
        )
        answer = content_to_text(response.content).strip()
        if not answer:
            raise GenerationFailure("Model returned an empty answer")
        return answer

    async def generate_structured(self, instructions: str, text: str) -> str:
        """
        Produce raw JSON text in structured-output mode.

        The caller owns parsing and validation of the returned text.

        Args:
            instructions: Task-specific instructions
            text: Source text

        Returns:
            str: Raw model output (expected to be JSON)

        Raises:
            QuotaExceeded: On provider rate limit
            GenerationFailure: On any other provider failure
        """
        messages = GRAPH_PROMPT.invoke({"instructions": instructions, "text": text}).to_messages()
        response = await call_provider(
            self._json_model.ainvoke(messages),
            timeout=self._timeout,
            failure_cls=GenerationFailure,
            operation="generate_structured",
        )
        return content_to_text(response.content)
