"""
Query-time retrieval and context assembly.
"""

from .context_assembler import NO_RELEVANT_CONTENT_ANSWER, AssembledContext, ContextAssembler
from .retriever import Retriever

__all__ = [
    "AssembledContext",
    "ContextAssembler",
    "NO_RELEVANT_CONTENT_ANSWER",
    "Retriever",
]
