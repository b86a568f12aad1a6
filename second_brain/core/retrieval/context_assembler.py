"""
Context assembly for grounded generation.

Concatenates retrieved chunk texts, most similar first, within a character
budget.

Dependencies: pydantic, second_brain.boundary.vdb
System role: Bridge between retrieval and the answer generator
"""

from pydantic import BaseModel, Field

from second_brain.boundary.vdb import RetrievedChunk

NO_RELEVANT_CONTENT_ANSWER = (
    "I couldn't find anything relevant in your notes to answer that question."
)


class AssembledContext(BaseModel):
    """Context text and the chunks it was built from."""

    text: str = ""
    used: list[RetrievedChunk] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.used


class ContextAssembler:
    """Pack chunk texts into a bounded context string."""

    def __init__(self, char_budget: int = 12000, delimiter: str = "\n---\n") -> None:
        if char_budget <= 0:
            raise ValueError("char_budget must be positive")
        self.char_budget = char_budget
        self.delimiter = delimiter

    def assemble(self, results: list[RetrievedChunk]) -> AssembledContext:
        """
        Build context from ranked results.

        Stops before the chunk that would exceed the budget. A first chunk
        that alone exceeds the budget is truncated to it.

        Args:
            results: Retrieved chunks, most similar first

        Returns:
            AssembledContext: Joined text and the chunks included
        """
        parts: list[str] = []
        used: list[RetrievedChunk] = []
        length = 0

        for chunk in results:
            separator = len(self.delimiter) if parts else 0
            if length + separator + len(chunk.text) > self.char_budget:
                if not parts:
                    parts.append(chunk.text[: self.char_budget])
                    used.append(chunk)
                break
            parts.append(chunk.text)
            used.append(chunk)
            length += separator + len(chunk.text)

        return AssembledContext(text=self.delimiter.join(parts), used=used)
