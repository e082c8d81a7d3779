"""docsearch engine — Wires the adapter, collection directory and services together.

One instance lives for the lifetime of the application; the API layer
reaches every domain operation through it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docsearch.adapters.base.adapter import SearchAdapter
from docsearch.adapters.opensearch.adapter import OpenSearchAdapter
from docsearch.core.collections import CollectionDirectory
from docsearch.core.documents import DocumentService
from docsearch.core.orchestrator import SearchOrchestrator

if TYPE_CHECKING:
    from docsearch.config.settings import Settings

logger = logging.getLogger(__name__)


class DocSearchEngine:
    """Application-wide container for docsearch components.

    Attributes:
        settings: Application configuration.
        adapter: Search engine adapter.
        collections: Collection directory.
        documents: Document write service.
        orchestrator: Multi-collection search.
    """

    def __init__(self, settings: Settings, adapter: SearchAdapter | None = None) -> None:
        self.settings = settings
        self.adapter = adapter or OpenSearchAdapter(
            hosts=settings.engine.hosts,
            username=settings.engine.username,
            password=settings.engine.password,
            verify_certs=settings.engine.verify_certs,
            **settings.engine.extra,
        )
        self.collections = CollectionDirectory(self.adapter, settings.engine)
        self.documents = DocumentService(self.adapter, self.collections)
        self.orchestrator = SearchOrchestrator(self.adapter, self.collections, settings)

    async def initialize(self) -> None:
        """Connect to the engine and make sure the collections index exists."""
        await self.adapter.initialize()
        await self.collections.ensure_collections_index()
        logger.info("docsearch engine initialized (adapter: %s)", self.adapter.name)

    async def shutdown(self) -> None:
        """Release engine connections."""
        await self.adapter.shutdown()
        logger.info("docsearch engine shut down")
