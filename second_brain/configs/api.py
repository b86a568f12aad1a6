"""
HTTP API configuration settings.

Request-rate limiting and upload limits.

Dependencies: pydantic, pydantic_settings
System role: Configuration for FastAPI routers and middleware
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from second_brain.configs.base import BaseSettings


class ApiSettings(BaseSettings):
    """API surface configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    rate_limit_requests: int = Field(
        default=60,
        description="Requests allowed per caller within one window",
    )
    rate_limit_window_seconds: int = Field(
        default=60,
        description="Fixed window length in seconds",
    )
    max_upload_bytes: int = Field(
        default=15 * 1024 * 1024,
        description="Maximum accepted PDF upload size",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
