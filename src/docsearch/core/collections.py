"""Collection directory — Collection records and handle resolution.

Collection records live in their own index (``engine.collections_index``),
keyed by handle.  Every collection owns one documents index named
``<engine.index_namespace>-<handle>``.
"""

from __future__ import annotations

import hmac
import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime

from docsearch.adapters.base.adapter import SearchAdapter
from docsearch.adapters.base.exceptions import DocumentNotFoundError
from docsearch.adapters.opensearch.mappings import collections_index_body, document_index_body
from docsearch.config.settings import EngineSettings
from docsearch.core.exceptions import NotFoundError, ValidationError
from docsearch.models.collection import HANDLE_PATTERN, Collection, CollectionStats

logger = logging.getLogger(__name__)

MISSING_HANDLES_MESSAGE = "Could not find all the specified collection handles"

_HANDLE = re.compile(HANDLE_PATTERN)


class CollectionDirectory:
    """Creates, looks up and deletes collections.

    Args:
        adapter: Engine adapter holding both collection records and documents.
        settings: Index naming settings.
    """

    def __init__(self, adapter: SearchAdapter, settings: EngineSettings) -> None:
        self.adapter = adapter
        self.settings = settings

    def index_name(self, handle: str) -> str:
        """Documents index backing ``handle``."""
        return f"{self.settings.index_namespace}-{handle}"

    async def ensure_collections_index(self) -> None:
        """Create the collection records index on first start."""
        if not await self.adapter.index_exists(self.settings.collections_index):
            await self.adapter.create_index(self.settings.collections_index, collections_index_body())

    async def create(self, handle: str, token: str) -> Collection:
        """Store a new collection record and create its documents index."""
        if not _HANDLE.match(handle):
            raise ValidationError("handle is invalid")

        now = datetime.now(UTC)
        collection = Collection(id=handle, token=token, created_at=now, updated_at=now)
        await self.adapter.index_document(
            self.settings.collections_index,
            handle,
            collection.model_dump(mode="json", exclude={"id"}),
        )

        index = self.index_name(handle)
        if not await self.adapter.index_exists(index):
            await self.adapter.create_index(index, document_index_body())
        logger.info("Created collection %s (index %s)", handle, index)
        return collection

    async def find(self, handle: str) -> Collection:
        """Return the collection record for ``handle``.

        Raises:
            NotFoundError: If no such collection exists.
        """
        try:
            record = await self.adapter.get_document(self.settings.collections_index, handle)
        except DocumentNotFoundError as e:
            raise NotFoundError(f"Could not find collection '{handle}'") from e
        return Collection(id=handle, **record)

    async def get(self, handle: str) -> CollectionStats:
        """Return the collection with its document count and last write time."""
        collection = await self.find(handle)
        index = self.index_name(handle)
        document_total = await self.adapter.count(index)

        last_document_sent = None
        if document_total:
            response = await self.adapter.execute_query(
                [index],
                {
                    "size": 0,
                    "query": {"match_all": {}},
                    "aggs": {"last_document_sent": {"max": {"field": "updated_at"}}},
                },
            )
            last = response.get("aggregations", {}).get("last_document_sent", {})
            if last.get("value_as_string"):
                last_document_sent = last["value_as_string"]

        return CollectionStats(
            **collection.model_dump(),
            document_total=document_total,
            last_document_sent=last_document_sent,
        )

    async def delete(self, handle: str) -> None:
        """Drop the collection's documents index and its record."""
        await self.find(handle)
        await self.adapter.delete_index(self.index_name(handle))
        await self.adapter.delete_document(self.settings.collections_index, handle)
        logger.info("Deleted collection %s", handle)

    async def authenticate(self, handle: str, token: str) -> bool:
        """Whether ``token`` is the secret of collection ``handle``."""
        try:
            collection = await self.find(handle)
        except NotFoundError:
            return False
        return hmac.compare_digest(collection.token.encode(), token.encode())

    async def resolve_handles(self, handles: Iterable[str]) -> dict[str, str]:
        """Map every handle to its documents index, all or nothing.

        Raises:
            NotFoundError: If any handle has no collection; the missing
                handles are logged, none are resolved.
        """
        resolved: dict[str, str] = {}
        missing: list[str] = []
        for handle in handles:
            try:
                await self.find(handle)
            except NotFoundError:
                missing.append(handle)
            else:
                resolved[handle] = self.index_name(handle)

        if missing:
            logger.info("Unknown collection handles: %s", ", ".join(missing))
            raise NotFoundError(MISSING_HANDLES_MESSAGE)
        return resolved
