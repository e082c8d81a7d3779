"""Result projector — Flatten an OpenSearch response into the public result shape."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from docsearch.core.fields import AGGREGATION_FIELDS, DEFAULT_INCLUDE, LANGUAGE_KEYS
from docsearch.models.search import AggregationBucket, SearchMetadata, SearchRequest, Suggestion

# Joins multiple highlight fragments of one field.
FRAGMENT_SEPARATOR = "..."


class ResultProjector:
    """Turns raw engine responses into ``(results, metadata)`` pairs.

    Results are de-suffixed to canonical field names and restricted to the
    request's ``include`` list (or :data:`DEFAULT_INCLUDE`).  Highlighted
    fragments replace stored values field by field; with the default field
    set ``content`` only shows up through a highlight.
    """

    def project(
        self, response: Mapping[str, Any], request: SearchRequest
    ) -> tuple[Iterator[dict[str, Any]], SearchMetadata]:
        """Project ``response`` for ``request``.

        Returns:
            A lazy iterator over results in engine order, and the metadata.
        """
        hits = response.get("hits") or {}
        metadata = SearchMetadata(
            total=self._total(hits),
            suggestion=self._suggestion(response, request),
            aggregations=self._aggregations(response),
        )
        return self._results(hits.get("hits") or [], request), metadata

    def _results(self, hits: list[dict[str, Any]], request: SearchRequest) -> Iterator[dict[str, Any]]:
        keys = LANGUAGE_KEYS[request.language]
        fields = request.include or DEFAULT_INCLUDE
        # Without an explicit include list, matching body text still surfaces as a snippet.
        highlighted_fields = fields if request.include else [*fields, *(name for name in keys if name not in fields)]

        for hit in hits:
            source = hit.get("_source") or {}
            highlight = hit.get("highlight") or {}
            result: dict[str, Any] = {}

            for name in highlighted_fields:
                stored = keys.get(name, name)
                fragments = highlight.get(stored)
                if fragments:
                    result[name] = FRAGMENT_SEPARATOR.join(fragments)
                elif name in fields and source.get(stored) is not None:
                    result[name] = source[stored]
            yield result

    @staticmethod
    def _total(hits: Mapping[str, Any]) -> int:
        total = hits.get("total", 0)
        if isinstance(total, Mapping):
            return int(total.get("value", 0))
        return int(total or 0)

    @staticmethod
    def _suggestion(response: Mapping[str, Any], request: SearchRequest) -> Suggestion | None:
        entries = (response.get("suggest") or {}).get("suggestion") or []
        for entry in entries:
            for option in entry.get("options") or []:
                text = option.get("text")
                if text and text != request.query:
                    return Suggestion(text=text, highlighted=option.get("highlighted") or text)
        return None

    @staticmethod
    def _aggregations(response: Mapping[str, Any]) -> dict[str, list[AggregationBucket]]:
        aggregations: dict[str, list[AggregationBucket]] = {}
        raw = response.get("aggregations") or {}
        for name in AGGREGATION_FIELDS:
            buckets = [
                AggregationBucket(value=bucket["key"], count=bucket["doc_count"])
                for bucket in (raw.get(name) or {}).get("buckets", [])
                if bucket.get("doc_count")
            ]
            if buckets:
                aggregations[name] = buckets
        return aggregations
