"""API envelope models shared by the management endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from docsearch.models.collection import CollectionStats


class ApiMessage(BaseModel):
    """Success envelope returned by data-modifying endpoints."""

    status: int = Field(default=200, description="Status code echoed in the body")
    developer_message: str = Field(default="OK", description="Message aimed at integrators")
    user_message: str | None = Field(default=None, description="Message suitable for end users")


class CollectionResponse(ApiMessage):
    """Envelope for ``GET /collections/{handle}``."""

    collection: CollectionStats = Field(description="The collection and its document statistics")


class ErrorResponse(BaseModel):
    """Error envelope; ``error`` is set for lookups that found nothing."""

    status: int = Field(description="Status code echoed in the body")
    developer_message: str | None = Field(default=None, description="What went wrong")
    error: str | None = Field(default=None, description="Lookup failure description")
