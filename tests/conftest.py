"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from docsearch.adapters.base.adapter import SearchAdapter
from docsearch.adapters.base.exceptions import DocumentNotFoundError
from docsearch.config.settings import Settings
from docsearch.core.engine import DocSearchEngine

COLLECTION_RECORD: dict[str, Any] = {
    "token": "secret",
    "created_at": "2018-08-09T21:36:50.087Z",
    "updated_at": "2018-08-09T21:36:50.087Z",
}


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        admin={"user": "admin", "password": "admin-secret"},
    )


@pytest.fixture
def adapter() -> AsyncMock:
    """A search adapter whose collections index knows only ``agency_blogs``."""
    mock = AsyncMock(spec=SearchAdapter)
    mock.name = "mock"

    async def _get_document(index: str, doc_id: str) -> dict[str, Any]:
        if index == "docsearch-collections" and doc_id == "agency_blogs":
            return dict(COLLECTION_RECORD)
        raise DocumentNotFoundError(f"Document '{doc_id}' not found.")

    mock.get_document.side_effect = _get_document
    mock.index_exists.return_value = True
    mock.count.return_value = 0
    return mock


@pytest.fixture
def engine(settings: Settings, adapter: AsyncMock) -> DocSearchEngine:
    return DocSearchEngine(settings, adapter=adapter)


@pytest.fixture
def english_document() -> dict[str, Any]:
    return {
        "title": "my title",
        "description": "my description",
        "content": "my content",
        "path": "http://www.foo.gov/bar.html",
        "promote": False,
        "tags": "this that",
        "searchgov_custom1": "this, custom, content",
        "searchgov_custom2": "that custom, content",
        "searchgov_custom3": "123",
        "created": "2018-01-01T12:00:00Z",
        "changed": "2018-02-01T12:00:00Z",
        "created_at": "2018-01-01T12:00:00Z",
        "updated_at": "2018-02-01T12:00:00Z",
    }


@pytest.fixture
def engine_response() -> dict[str, Any]:
    """A two-hit OpenSearch response for the query ``common contentx``."""
    return {
        "took": 3,
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "hits": [
                {
                    "_index": "docsearch-documents-agency_blogs",
                    "_id": "a1",
                    "_score": 1.8,
                    "_source": {
                        "language": "en",
                        "created": "2024-05-01T12:00:00Z",
                        "changed": "2024-05-02T12:00:00Z",
                        "path": "http://www.agency.gov/page1.html",
                        "title_en": "title 1 common content",
                        "description_en": "description 1 common content",
                    },
                    "highlight": {
                        "title_en": ["title 1 \ue000common\ue001 content"],
                        "content_en": ["content 1 \ue000common\ue001 content"],
                    },
                },
                {
                    "_index": "docsearch-documents-agency_blogs",
                    "_id": "a2",
                    "_score": 0.9,
                    "_source": {
                        "language": "en",
                        "created": "2024-05-01T12:00:00Z",
                        "changed": "2024-05-01T12:00:00Z",
                        "path": "http://www.agency.gov/page2.html",
                        "title_en": "title 2 common content",
                        "description_en": "description 2 common content",
                    },
                },
            ],
        },
        "aggregations": {
            "tags": {"buckets": [{"key": "tag1", "doc_count": 1}, {"key": "tag2", "doc_count": 1}]},
            "searchgov_custom1": {"buckets": []},
            "searchgov_custom2": {"buckets": []},
            "searchgov_custom3": {"buckets": []},
            "extension": {"buckets": [{"key": "html", "doc_count": 2}]},
        },
        "suggest": {
            "suggestion": [
                {
                    "text": "common contentx",
                    "offset": 0,
                    "length": 15,
                    "options": [
                        {"text": "common content", "highlighted": "common \ue000content\ue001", "score": 0.2},
                    ],
                }
            ]
        },
    }


@pytest.fixture
def empty_response() -> dict[str, Any]:
    return {
        "took": 1,
        "hits": {"total": {"value": 0, "relation": "eq"}, "hits": []},
        "aggregations": {
            "tags": {"buckets": []},
            "searchgov_custom1": {"buckets": []},
            "searchgov_custom2": {"buckets": []},
            "searchgov_custom3": {"buckets": []},
            "extension": {"buckets": []},
        },
        "suggest": {"suggestion": [{"text": "no hits", "offset": 0, "length": 7, "options": []}]},
    }
