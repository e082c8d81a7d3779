"""Tests for the search orchestrator."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from docsearch.adapters.base.exceptions import ConnectionError, DocumentNotFoundError, QueryError
from docsearch.config.settings import Settings
from docsearch.core.engine import DocSearchEngine
from docsearch.core.exceptions import NotFoundError, UpstreamUnavailable, ValidationError


@pytest.fixture
def adapter(adapter: AsyncMock) -> AsyncMock:
    """Collections index knows ``agency_blogs`` and ``other_site``."""

    async def _get_document(index: str, doc_id: str) -> dict[str, Any]:
        if index == "docsearch-collections" and doc_id in ("agency_blogs", "other_site"):
            return {"token": "secret", "created_at": "2018-08-09T21:36:50Z", "updated_at": "2018-08-09T21:36:50Z"}
        raise DocumentNotFoundError(doc_id)

    adapter.get_document.side_effect = _get_document
    return adapter


class TestSearch:
    async def test_searches_all_collections_in_one_call(
        self, engine: DocSearchEngine, adapter: AsyncMock, engine_response: dict[str, Any]
    ) -> None:
        adapter.execute_query.return_value = engine_response

        response = await engine.orchestrator.search(
            {"handles": "agency_blogs,other_site", "query": "common contentx"}
        )

        adapter.execute_query.assert_awaited_once()
        indices, body = adapter.execute_query.await_args.args
        assert indices == ["docsearch-documents-agency_blogs", "docsearch-documents-other_site"]
        assert body["query"]["bool"]["must"][0]["multi_match"]["query"] == "common contentx"
        assert response.metadata.total == 2
        assert [result["title"] for result in response.results] == [
            "title 1 \ue000common\ue001 content",
            "title 2 common content",
        ]
        assert response.metadata.suggestion is not None
        assert response.metadata.suggestion.text == "common content"

    async def test_empty_results(
        self, engine: DocSearchEngine, adapter: AsyncMock, empty_response: dict[str, Any]
    ) -> None:
        adapter.execute_query.return_value = empty_response

        response = await engine.orchestrator.search({"handles": "agency_blogs", "query": "no hits"})

        assert response.results == []
        assert response.metadata.total == 0
        assert response.metadata.suggestion is None
        assert response.metadata.aggregations == {}

    async def test_validation_error_skips_engine(self, engine: DocSearchEngine, adapter: AsyncMock) -> None:
        with pytest.raises(ValidationError, match="handles is missing, handles is empty"):
            await engine.orchestrator.search({"query": "anything"})
        adapter.get_document.assert_not_awaited()
        adapter.execute_query.assert_not_awaited()

    async def test_unknown_handle_fails_whole_search(self, engine: DocSearchEngine, adapter: AsyncMock) -> None:
        with pytest.raises(NotFoundError, match="Could not find all the specified collection handles"):
            await engine.orchestrator.search({"handles": "agency_blogs,missing_site"})
        adapter.execute_query.assert_not_awaited()

    async def test_query_error_becomes_unavailable(self, engine: DocSearchEngine, adapter: AsyncMock) -> None:
        adapter.execute_query.side_effect = QueryError("search_phase_execution_exception")
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await engine.orchestrator.search({"handles": "agency_blogs"})
        assert exc_info.value.retryable is True

    async def test_connection_error_becomes_unavailable(self, engine: DocSearchEngine, adapter: AsyncMock) -> None:
        adapter.execute_query.side_effect = ConnectionError("refused")
        with pytest.raises(UpstreamUnavailable):
            await engine.orchestrator.search({"handles": "agency_blogs"})

    async def test_timeout_becomes_unavailable(self, settings: Settings, adapter: AsyncMock) -> None:
        settings.engine.timeout = 0.01

        async def _slow(indices: list[str], body: dict[str, Any]) -> dict[str, Any]:
            await asyncio.sleep(1)
            return {}

        adapter.execute_query.side_effect = _slow
        engine = DocSearchEngine(settings, adapter=adapter)

        with pytest.raises(UpstreamUnavailable, match="did not respond in time"):
            await engine.orchestrator.search({"handles": "agency_blogs"})

    async def test_engine_failure_while_resolving_handles_becomes_unavailable(
        self, engine: DocSearchEngine, adapter: AsyncMock
    ) -> None:
        adapter.get_document.side_effect = ConnectionError("OpenSearch unreachable")
        with pytest.raises(UpstreamUnavailable, match="unavailable"):
            await engine.orchestrator.search({"handles": "agency_blogs", "query": "x"})
        adapter.execute_query.assert_not_awaited()

    async def test_query_error_while_resolving_handles_becomes_unavailable(
        self, engine: DocSearchEngine, adapter: AsyncMock
    ) -> None:
        adapter.get_document.side_effect = QueryError("boom")
        with pytest.raises(UpstreamUnavailable):
            await engine.orchestrator.search({"handles": "agency_blogs", "query": "x"})

    async def test_slow_handle_resolution_times_out(self, settings: Settings, adapter: AsyncMock) -> None:
        settings.engine.timeout = 0.01

        async def _slow(index: str, doc_id: str) -> dict[str, Any]:
            await asyncio.sleep(1)
            return {}

        adapter.get_document.side_effect = _slow
        engine = DocSearchEngine(settings, adapter=adapter)

        with pytest.raises(UpstreamUnavailable, match="did not respond in time"):
            await engine.orchestrator.search({"handles": "agency_blogs"})
        adapter.execute_query.assert_not_awaited()
