"""
Indexing and retrieval configuration settings.

Chunking parameters, retrieval fan-out and context budget.

Dependencies: pydantic, pydantic_settings
System role: Tuning knobs for the indexing-and-retrieval pipeline
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from second_brain.configs.base import BaseSettings


class IndexingSettings(BaseSettings):
    """Chunking, retrieval and context assembly configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INDEXING_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, description="Target chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between consecutive chunks")

    top_k: int = Field(default=5, description="Number of chunks returned per query")
    oversample_factor: int = Field(
        default=20,
        description="Candidate pool multiplier applied to top_k before ranking",
    )
    context_char_budget: int = Field(
        default=12000,
        description="Maximum characters of retrieved text passed to the generator",
    )
    min_graph_text_length: int = Field(
        default=20,
        description="Below this length the knowledge graph skips the model call",
    )
