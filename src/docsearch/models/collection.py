"""Collection models — Tenant namespaces each backed by one documents index."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

HANDLE_PATTERN = r"^[a-z0-9._]+$"


class CollectionCreate(BaseModel):
    """Payload for ``POST /collections``."""

    handle: str = Field(min_length=1, max_length=128, pattern=HANDLE_PATTERN, description="Unique collection handle")
    token: str = Field(min_length=1, description="Secret used by clients pushing documents")


class Collection(BaseModel):
    """A stored collection record."""

    id: str = Field(description="Collection handle")
    token: str = Field(description="Secret used by clients pushing documents")
    created_at: datetime = Field(description="When the collection was created")
    updated_at: datetime = Field(description="When the collection record last changed")


class CollectionStats(Collection):
    """A collection together with statistics about its documents."""

    document_total: int = Field(default=0, description="Number of documents in the collection")
    last_document_sent: datetime | None = Field(default=None, description="Most recent document write")
