"""Document service — Write documents into a collection through the codec."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from docsearch.adapters.base.adapter import SearchAdapter
from docsearch.adapters.base.exceptions import DocumentConflictError, DocumentNotFoundError
from docsearch.core.collections import CollectionDirectory
from docsearch.core.exceptions import ConflictError, NotFoundError
from docsearch.core.serde import deserialize, serialize

logger = logging.getLogger(__name__)


class DocumentService:
    """Creates, updates and deletes documents in a collection's index.

    Args:
        adapter: Engine adapter.
        directory: Maps collection handles to index names.
    """

    def __init__(self, adapter: SearchAdapter, directory: CollectionDirectory) -> None:
        self.adapter = adapter
        self.directory = directory

    async def create(self, handle: str, document_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Serialize and store a new document.

        ``changed`` falls back to ``created`` and ``created_at`` is stamped
        here, on first write only.

        Raises:
            ConflictError: If a document with ``document_id`` already exists.
        """
        document = dict(fields)
        if document.get("changed") is None and document.get("created") is not None:
            document["changed"] = document["created"]
        document["created_at"] = datetime.now(UTC)

        record = serialize(document, document["language"])
        try:
            await self.adapter.index_document(self.directory.index_name(handle), document_id, record, create=True)
        except DocumentConflictError as e:
            raise ConflictError("Document already exists with that ID") from e
        logger.info("Created document %s in collection %s", document_id, handle)
        return record

    async def update(self, handle: str, document_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Merge ``changes`` into a stored document and re-serialize it.

        A language change moves the text to the new suffixed fields; the
        old ones are not carried over.

        Raises:
            NotFoundError: If the document does not exist.
        """
        index = self.directory.index_name(handle)
        try:
            stored = await self.adapter.get_document(index, document_id)
        except DocumentNotFoundError as e:
            raise NotFoundError("Resource could not be found.") from e

        document = deserialize(stored, stored["language"])
        document.update(changes)

        record = serialize(document, document["language"])
        await self.adapter.index_document(index, document_id, record)
        logger.info("Updated document %s in collection %s", document_id, handle)
        return record

    async def delete(self, handle: str, document_id: str) -> None:
        """Remove a document from the collection.

        Raises:
            NotFoundError: If the document does not exist.
        """
        try:
            await self.adapter.delete_document(self.directory.index_name(handle), document_id)
        except DocumentNotFoundError as e:
            raise NotFoundError("Resource could not be found.") from e
        logger.info("Deleted document %s from collection %s", document_id, handle)
