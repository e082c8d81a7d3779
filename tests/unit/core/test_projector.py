"""Tests for the result projector."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from docsearch.core.projector import ResultProjector
from docsearch.models.search import AggregationBucket, SearchRequest, Suggestion


@pytest.fixture
def projector() -> ResultProjector:
    return ResultProjector()


def _request(**fields: Any) -> SearchRequest:
    return SearchRequest(handles=["agency_blogs"], language="en", **fields)


class TestResults:
    def test_highlights_replace_stored_values(
        self, projector: ResultProjector, engine_response: dict[str, Any]
    ) -> None:
        results, _ = projector.project(engine_response, _request(query="common contentx"))
        first = next(results)
        assert first == {
            "language": "en",
            "created": "2024-05-01T12:00:00Z",
            "changed": "2024-05-02T12:00:00Z",
            "path": "http://www.agency.gov/page1.html",
            "title": "title 1 \ue000common\ue001 content",
            "description": "description 1 common content",
            "content": "content 1 \ue000common\ue001 content",
        }

    def test_content_only_appears_when_highlighted(
        self, projector: ResultProjector, engine_response: dict[str, Any]
    ) -> None:
        results = list(projector.project(engine_response, _request(query="common contentx"))[0])
        assert "content" in results[0]
        assert "content" not in results[1]

    def test_preserves_engine_order(self, projector: ResultProjector, engine_response: dict[str, Any]) -> None:
        results = list(projector.project(engine_response, _request())[0])
        assert [result["path"] for result in results] == [
            "http://www.agency.gov/page1.html",
            "http://www.agency.gov/page2.html",
        ]

    def test_include_restricts_fields(self, projector: ResultProjector, engine_response: dict[str, Any]) -> None:
        results = list(projector.project(engine_response, _request(include=["title", "path"]))[0])
        assert results[1] == {"title": "title 2 common content", "path": "http://www.agency.gov/page2.html"}
        # Highlighted content is not surfaced when it was not asked for.
        assert set(results[0]) == {"title", "path"}

    def test_joins_multiple_fragments(self, projector: ResultProjector) -> None:
        response = {
            "hits": {
                "total": {"value": 1},
                "hits": [{"_source": {"title_en": "t"}, "highlight": {"content_en": ["first", "second"]}}],
            }
        }
        results = list(projector.project(response, _request(include=["content"]))[0])
        assert results == [{"content": "first...second"}]

    def test_missing_source_fields_are_omitted(self, projector: ResultProjector) -> None:
        response = {"hits": {"total": {"value": 1}, "hits": [{"_source": {"title_en": "only title"}}]}}
        results = list(projector.project(response, _request())[0])
        assert results == [{"title": "only title"}]

    def test_other_language_is_desuffixed(self, projector: ResultProjector) -> None:
        response = {"hits": {"total": 1, "hits": [{"_source": {"language": "es", "title_es": "hola"}}]}}
        results = list(projector.project(response, SearchRequest(handles=["x"], language="es"))[0])
        assert results == [{"language": "es", "title": "hola"}]

    def test_results_are_lazy(self, projector: ResultProjector, engine_response: dict[str, Any]) -> None:
        results, metadata = projector.project(engine_response, _request())
        assert isinstance(results, Iterator)
        assert metadata.total == 2
        assert len(list(results)) == 2
        assert list(results) == []


class TestMetadata:
    def test_total(self, projector: ResultProjector, engine_response: dict[str, Any]) -> None:
        _, metadata = projector.project(engine_response, _request())
        assert metadata.total == 2

    def test_legacy_integer_total(self, projector: ResultProjector) -> None:
        _, metadata = projector.project({"hits": {"total": 7, "hits": []}}, _request())
        assert metadata.total == 7

    def test_suggestion(self, projector: ResultProjector, engine_response: dict[str, Any]) -> None:
        _, metadata = projector.project(engine_response, _request(query="common contentx"))
        assert metadata.suggestion == Suggestion(text="common content", highlighted="common \ue000content\ue001")

    def test_suggestion_equal_to_query_is_dropped(
        self, projector: ResultProjector, engine_response: dict[str, Any]
    ) -> None:
        _, metadata = projector.project(engine_response, _request(query="common content"))
        assert metadata.suggestion is None

    def test_aggregations_skip_empty_facets(self, projector: ResultProjector, engine_response: dict[str, Any]) -> None:
        _, metadata = projector.project(engine_response, _request())
        assert metadata.aggregations == {
            "tags": [AggregationBucket(value="tag1", count=1), AggregationBucket(value="tag2", count=1)],
            "extension": [AggregationBucket(value="html", count=2)],
        }

    def test_empty_response(self, projector: ResultProjector, empty_response: dict[str, Any]) -> None:
        results, metadata = projector.project(empty_response, _request(query="no hits"))
        assert list(results) == []
        assert metadata.total == 0
        assert metadata.suggestion is None
        assert metadata.aggregations == {}

    def test_bare_response(self, projector: ResultProjector) -> None:
        results, metadata = projector.project({}, _request())
        assert list(results) == []
        assert metadata.total == 0
        assert metadata.aggregations == {}
