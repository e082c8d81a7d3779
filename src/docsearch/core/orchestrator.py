"""Search orchestrator — One search over one or more collections.

Pipeline:
  raw params → [QueryCompiler] → SearchRequest
             → [CollectionDirectory] → index names (all or nothing)
             → [SearchAdapter] → one multi-index engine call
             → [ResultProjector] → results + metadata
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any

from docsearch.adapters.base.adapter import SearchAdapter
from docsearch.adapters.base.exceptions import AdapterError
from docsearch.config.settings import Settings
from docsearch.core.collections import CollectionDirectory
from docsearch.core.compiler import QueryCompiler
from docsearch.core.exceptions import UpstreamUnavailable
from docsearch.core.projector import ResultProjector
from docsearch.models.search import SearchResponse

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Runs validated searches across collections.

    ``ValidationError`` and ``NotFoundError`` propagate unchanged; only
    engine failures and timeouts are turned into ``UpstreamUnavailable``.
    Nothing is retried here.

    Args:
        adapter: Engine adapter executing the query.
        directory: Resolves collection handles to indices.
        settings: Application settings (search defaults, engine timeout).
    """

    def __init__(self, adapter: SearchAdapter, directory: CollectionDirectory, settings: Settings) -> None:
        self.adapter = adapter
        self.directory = directory
        self.settings = settings
        self.compiler = QueryCompiler(settings.search)
        self.projector = ResultProjector()

    async def search(self, raw_params: Mapping[str, Any]) -> SearchResponse:
        """Search the collections named in ``raw_params['handles']``.

        Args:
            raw_params: Flat request parameters (query string).

        Returns:
            Results in engine order and their metadata.

        Raises:
            ValidationError: If the parameters are invalid.
            NotFoundError: If any handle does not name a collection.
            UpstreamUnavailable: If the engine failed or timed out.
        """
        start = time.monotonic()
        request = self.compiler.compile(raw_params)
        body = self.compiler.build_query(request)
        timeout = self.settings.engine.timeout
        handles = ", ".join(request.handles)

        try:
            indices = await asyncio.wait_for(self.directory.resolve_handles(request.handles), timeout=timeout)
            response = await asyncio.wait_for(
                self.adapter.execute_query(list(indices.values()), body),
                timeout=timeout,
            )
        except TimeoutError as e:
            logger.warning("Search timed out after %.1f s on %s", timeout, handles)
            raise UpstreamUnavailable("The search engine did not respond in time") from e
        except AdapterError as e:
            logger.error("Search failed on %s: %s", handles, e)
            raise UpstreamUnavailable("The search engine is unavailable") from e

        results, metadata = self.projector.project(response, request)
        search_response = SearchResponse(results=list(results), metadata=metadata)
        logger.info(
            "Searched %s for %r: %d of %d hits in %d ms",
            ",".join(request.handles),
            request.query,
            len(search_response.results),
            metadata.total,
            int((time.monotonic() - start) * 1000),
        )
        return search_response
