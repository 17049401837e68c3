"""Shared response envelope for domain operations."""

from pydantic import BaseModel, Field

INTERNAL_ERROR_MESSAGE = "Internal server error occurred."


class CoreOutput(BaseModel):
    """ok=True on success; otherwise error holds a human-readable reason."""

    ok: bool = Field(..., description="Whether the operation succeeded")
    error: str | None = Field(default=None, description="Failure reason when ok is false")


class CreatedOutput(CoreOutput):
    """CoreOutput plus the id of the created row."""

    id: int | None = None
