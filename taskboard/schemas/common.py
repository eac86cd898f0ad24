"""Shared schema base, error body and pagination helpers."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialize with camelCase keys; accept camelCase or snake_case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(CamelModel):
    """Uniform error body returned for every failed request."""

    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable error message")
    timestamp: datetime = Field(..., description="Time the error was produced (UTC)")
    error_code: str = Field(..., description="Machine-readable error code")


class MessageResponse(BaseModel):
    """Plain confirmation message (e.g. after a delete)."""

    message: str
