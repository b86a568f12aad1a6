"""
AI provider configuration settings.

Model identifiers, embedding dimension and call timeouts for the
Google Gemini embedding and chat models.

Dependencies: pydantic, pydantic_settings
System role: Configuration for the embedding gateway and answer generator
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from second_brain.configs.base import BaseSettings


class ProviderSettings(BaseSettings):
    """Google Gemini provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROVIDER_",
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
        description="Google API key for Gemini access",
    )
    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Fixed embedding vector dimension for this deployment",
    )
    chat_model: str = Field(
        default="gemini-flash-latest",
        description="Gemini chat model used for answers and graph extraction",
    )
    temperature: float = Field(default=0.2, description="Chat model temperature")
    max_output_tokens: int = Field(default=2048, description="Chat model output cap")
    timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound for a single provider call before it is cancelled",
    )
