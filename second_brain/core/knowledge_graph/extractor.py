"""
Knowledge graph extraction.

Asks the answer generator for a JSON concept graph and sanitizes it. Short
or empty text gets a single-node graph without calling the model.

Dependencies: second_brain.core.providers, second_brain.core.knowledge_graph.sanitizer
System role: Backend for note visualization
"""

import logging

from second_brain.core.document_processing import normalize_whitespace
from second_brain.core.exceptions import MalformedProviderOutput
from second_brain.core.providers import AnswerGenerator

from .sanitizer import minimal_graph, parse_graph_json, sanitize_graph
from .schema import KnowledgeGraph

logger = logging.getLogger(__name__)

GRAPH_INSTRUCTIONS = (
    "Extract the key concepts of the following text and the relationships "
    "between them as a knowledge graph."
)


class KnowledgeGraphExtractor:
    """Text to sanitized knowledge graph."""

    def __init__(
        self,
        generator: AnswerGenerator,
        min_text_length: int = 20,
        recover_malformed: bool = True,
    ) -> None:
        """
        Initialize extractor.

        Args:
            generator: Generator used in structured mode
            min_text_length: Shorter text skips the model call
            recover_malformed: Return the minimal graph instead of raising
                when the model output cannot be used
        """
        self._generator = generator
        self._min_text_length = min_text_length
        self._recover_malformed = recover_malformed

    async def extract_graph(self, text: str | None, title: str | None = None) -> KnowledgeGraph:
        """
        Extract a knowledge graph from text.

        Args:
            text: Source text
            title: Document title, used to label a minimal graph

        Returns:
            KnowledgeGraph: Graph whose edges all reference returned nodes

        Raises:
            MalformedProviderOutput: Unusable model output and recovery disabled
            QuotaExceeded: Provider rate limit
            GenerationFailure: Any other provider failure
        """
        normalized = normalize_whitespace(text)
        if len(normalized) < self._min_text_length:
            logger.info(f"{__name__}:extract_graph - text length {len(normalized)} below minimum, minimal graph")
            return minimal_graph(title, normalized)

        raw = await self._generator.generate_structured(GRAPH_INSTRUCTIONS, normalized)

        try:
            sanitized = sanitize_graph(parse_graph_json(raw), fallback_label=title or normalized[:40])
        except MalformedProviderOutput as e:
            if not self._recover_malformed:
                raise
            logger.warning(
                f"{__name__}:extract_graph - malformed model output, returning minimal graph",
                extra={"error": e.message},
            )
            return minimal_graph(title, normalized)

        if sanitized.dropped:
            logger.info(
                f"{__name__}:extract_graph - dropped {len(sanitized.dropped)} item(s): "
                + ", ".join(f"{d.item}[{d.index}] {d.reason}" for d in sanitized.dropped)
            )
        graph = sanitized.graph
        logger.info(f"{__name__}:extract_graph - nodes={len(graph.nodes)} edges={len(graph.edges)}")
        return graph
