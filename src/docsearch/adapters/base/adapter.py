"""Base search adapter — Abstract interface for the engine behind every collection.

The adapter is responsible for:
  1. Executing one structured query across several indices at once
  2. Writing, reading and deleting documents in a collection index
  3. Creating, checking and dropping indices
  4. Reporting health status

It never interprets document fields; shaping records and queries is the
job of the codec and the query compiler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class AdapterHealth(BaseModel):
    """Health status of a search adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchAdapter(ABC):
    """Abstract base class for search engine adapters.

    Adapters should be stateless apart from their connection pool, which is
    created in ``initialize()`` and released in ``shutdown()``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'opensearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open connections. Called once during application startup."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close connections. Called during application shutdown."""

    @abstractmethod
    async def execute_query(self, indices: list[str], body: dict[str, Any]) -> dict[str, Any]:
        """Run one search across all ``indices``.

        Args:
            indices: Concrete index names; fan-out is left to the engine.
            body: Structured query body.

        Returns:
            The raw engine response (hits, highlights, aggregations, suggest).

        Raises:
            QueryError: If the engine rejects or fails the request.
        """

    @abstractmethod
    async def index_document(
        self, index: str, doc_id: str, record: dict[str, Any], *, create: bool = False
    ) -> dict[str, Any]:
        """Write ``record`` under ``doc_id``.

        Args:
            index: Target index.
            doc_id: Document identifier.
            record: Serialized record.
            create: Fail instead of overwriting an existing document.

        Raises:
            DocumentConflictError: If ``create`` is set and the id exists.
        """

    @abstractmethod
    async def get_document(self, index: str, doc_id: str) -> dict[str, Any]:
        """Return the stored record for ``doc_id``.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def delete_document(self, index: str, doc_id: str) -> None:
        """Delete ``doc_id``.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def index_exists(self, index: str) -> bool:
        """Whether ``index`` exists."""

    @abstractmethod
    async def create_index(self, index: str, body: dict[str, Any] | None = None) -> None:
        """Create ``index`` with optional settings and mappings."""

    @abstractmethod
    async def delete_index(self, index: str) -> None:
        """Drop ``index`` if it exists."""

    @abstractmethod
    async def count(self, index: str) -> int:
        """Number of documents in ``index``."""

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend."""
