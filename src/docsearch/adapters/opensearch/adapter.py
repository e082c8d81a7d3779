"""OpenSearch adapter — Collection indices and multi-index search on OpenSearch (v2+).

Uses the async ``opensearch-py`` client.  Each collection owns one index;
a search over several collections is a single request naming all of
their indices, leaving the fan-out to the cluster.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

import opensearchpy
from opensearchpy import AsyncOpenSearch

from docsearch.adapters.base.adapter import AdapterHealth, SearchAdapter
from docsearch.adapters.base.exceptions import (
    ConnectionError,
    DocumentConflictError,
    DocumentNotFoundError,
    QueryError,
)

logger = logging.getLogger(__name__)


class OpenSearchAdapter(SearchAdapter):
    """Search adapter for OpenSearch (v2+).

    Args:
        hosts: List of OpenSearch node URLs.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["http://localhost:9200"]
        self._username = username
        self._password = password
        self._verify_certs = verify_certs
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "opensearch"

    async def initialize(self) -> None:
        """Create and verify the ``AsyncOpenSearch`` client."""
        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
        }
        if self._username and self._password:
            client_kwargs["http_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        try:
            self._client = AsyncOpenSearch(**client_kwargs)
            info = await self._client.info()
            version = info.get("version", {}).get("number", "unknown")
            cluster = info.get("cluster_name", "unknown")
            logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)
        except Exception as e:
            raise ConnectionError(f"Failed to connect to OpenSearch: {e}") from e

    async def shutdown(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    def _require_client(self) -> Any:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")
        return self._client

    # ── Search ───────────────────────────────────────────────────────────

    async def execute_query(self, indices: list[str], body: dict[str, Any]) -> dict[str, Any]:
        """Execute ``body`` against every index in ``indices`` in one request."""
        client = self._require_client()
        try:
            start = time.monotonic()
            response = await client.search(index=",".join(indices), body=body)
            logger.debug(
                "Searched %d indices in %d ms (engine took %s ms)",
                len(indices),
                int((time.monotonic() - start) * 1000),
                response.get("took"),
            )
            return dict(response)
        except opensearchpy.ConnectionError as e:
            raise ConnectionError(f"OpenSearch unreachable: {e}") from e
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"OpenSearch query failed: {e}") from e

    # ── Documents ────────────────────────────────────────────────────────

    async def index_document(
        self, index: str, doc_id: str, record: dict[str, Any], *, create: bool = False
    ) -> dict[str, Any]:
        """Write ``record`` under ``doc_id``; ``create`` refuses to overwrite."""
        client = self._require_client()
        try:
            if create:
                response = await client.create(index=index, id=doc_id, body=record)
            else:
                response = await client.index(index=index, id=doc_id, body=record)
            return dict(response)
        except opensearchpy.ConflictError as e:
            raise DocumentConflictError(f"Document '{doc_id}' already exists.") from e
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to index document: {e}") from e

    async def get_document(self, index: str, doc_id: str) -> dict[str, Any]:
        """Return the ``_source`` of ``doc_id``."""
        client = self._require_client()
        try:
            response = await client.get(index=index, id=doc_id)
            return dict(response.get("_source") or {})
        except opensearchpy.NotFoundError as e:
            raise DocumentNotFoundError(f"Document '{doc_id}' not found.") from e
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to fetch document: {e}") from e

    async def delete_document(self, index: str, doc_id: str) -> None:
        """Delete ``doc_id`` from ``index``."""
        client = self._require_client()
        try:
            await client.delete(index=index, id=doc_id)
        except opensearchpy.NotFoundError as e:
            raise DocumentNotFoundError(f"Document '{doc_id}' not found.") from e
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to delete document: {e}") from e

    # ── Indices ──────────────────────────────────────────────────────────

    async def index_exists(self, index: str) -> bool:
        client = self._require_client()
        try:
            return bool(await client.indices.exists(index=index))
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to check index '{index}': {e}") from e

    async def create_index(self, index: str, body: dict[str, Any] | None = None) -> None:
        client = self._require_client()
        try:
            await client.indices.create(index=index, body=body or {})
            logger.info("Created index %s", index)
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to create index '{index}': {e}") from e

    async def delete_index(self, index: str) -> None:
        client = self._require_client()
        try:
            await client.indices.delete(index=index, ignore_unavailable=True)
            logger.info("Deleted index %s", index)
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to delete index '{index}': {e}") from e

    async def count(self, index: str) -> int:
        client = self._require_client()
        try:
            response = await client.count(index=index)
            return int(response.get("count", 0))
        except opensearchpy.OpenSearchException as e:
            raise QueryError(f"Failed to count documents in '{index}': {e}") from e

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Check OpenSearch cluster health."""
        if not self._client:
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return AdapterHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return AdapterHealth(status="unhealthy", message=str(e))
