"""
AI provider capability boundary: embeddings, answer generation, error mapping.
"""

from .answer_generator import AnswerGenerator, GeminiAnswerGenerator
from .embedding_gateway import EmbeddingGateway, GeminiEmbeddingGateway

__all__ = [
    "AnswerGenerator",
    "GeminiAnswerGenerator",
    "EmbeddingGateway",
    "GeminiEmbeddingGateway",
]
