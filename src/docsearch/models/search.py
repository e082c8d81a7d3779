"""Search request and response models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """A validated search over one or more collections.

    Built by ``QueryCompiler.compile`` from flat query-string parameters.
    """

    handles: list[str] = Field(min_length=1, description="Collection handles to search, in request order")
    language: str = Field(description="ISO code selecting the language-suffixed text fields")
    query: str | None = Field(default=None, description="Free-text query (None matches every document)")
    tags: list[str] = Field(default_factory=list, description="Match documents carrying any of these tags")
    ignore_tags: list[str] = Field(default_factory=list, description="Exclude documents carrying any of these tags")
    min_timestamp: datetime | None = Field(default=None, description="Inclusive lower bound on the document timestamp")
    max_timestamp: datetime | None = Field(default=None, description="Inclusive upper bound on the document timestamp")
    sort_by_date: bool = Field(default=False, description="Newest first instead of most relevant first")
    offset: int = Field(default=0, ge=0, description="Number of hits to skip")
    size: int = Field(default=20, ge=1, description="Number of hits to return")
    include: list[str] = Field(default_factory=list, description="Fields to project (empty = defaults)")

    @property
    def effective_tags(self) -> list[str]:
        """Requested tags minus any that are also ignored."""
        ignored = set(self.ignore_tags)
        return [tag for tag in self.tags if tag not in ignored]


class Suggestion(BaseModel):
    """Spelling correction proposed by the engine."""

    text: str = Field(description="Corrected query text")
    highlighted: str = Field(description="Corrected query with changed terms wrapped in highlight markers")


class AggregationBucket(BaseModel):
    """One facet value and the number of matching documents carrying it."""

    value: Any = Field(description="Facet value")
    count: int = Field(description="Matching document count")


class SearchMetadata(BaseModel):
    """Totals, suggestion and facets accompanying a page of results."""

    total: int = Field(default=0, ge=0, description="Total matching documents")
    suggestion: Suggestion | None = Field(default=None, description="Spelling correction, if any")
    aggregations: dict[str, list[AggregationBucket]] = Field(
        default_factory=dict,
        description="Facet name to buckets; empty when no facet has buckets",
    )


class SearchResponse(BaseModel):
    """Public search envelope."""

    results: list[dict[str, Any]] = Field(default_factory=list, description="Projected hits in engine order")
    metadata: SearchMetadata = Field(default_factory=SearchMetadata, description="Search metadata")
