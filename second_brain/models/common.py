"""
Common response models and utilities.

Camel-case base model and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, accepting either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorBody(BaseModel):
    kind: str = Field(description="Stable machine-readable error kind")
    message: str = Field(description="Human-readable message")
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: ErrorBody


class MessageResponse(BaseModel):
    msg: str


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
