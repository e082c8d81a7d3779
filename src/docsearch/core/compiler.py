"""Query compiler — Flat request parameters to a structured OpenSearch query.

Compilation happens in two steps:

  1. ``compile()`` validates the raw query-string mapping and produces a
     ``SearchRequest``.  Every violation found is collected so the caller
     gets one comma-joined message (``handles is missing, handles is empty``).
  2. ``build_query()`` turns a ``SearchRequest`` into the request body sent
     to every resolved collection index in a single multi-index search.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from docsearch.config.settings import SearchSettings
from docsearch.core.exceptions import ValidationError
from docsearch.core.fields import (
    AGGREGATION_FIELDS,
    DEFAULT_INCLUDE,
    LANGUAGE_KEYS,
    PROJECTABLE_FIELDS,
    SUGGESTION_FIELD,
    SUPPORTED_LANGUAGES,
    TIMESTAMP_FIELD,
)
from docsearch.core.serde import split_list
from docsearch.models.search import SearchRequest

_HANDLE = re.compile(r"^[a-z0-9._]+$")
_UNSIGNED = re.compile(r"^\d+$")

_TRUE_LITERALS = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_LITERALS = frozenset({"0", "false", "f", "no", "n", "off", ""})


def parse_bool(value: Any) -> bool:
    """Map an accepted literal (``1``, ``"true"``, ``False``...) to a bool.

    Raises:
        ValueError: If ``value`` is not one of the accepted literals.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        literal = value.strip().lower()
        if literal in _TRUE_LITERALS:
            return True
        if literal in _FALSE_LITERALS:
            return False
    raise ValueError(f"not a boolean literal: {value!r}")


def parse_unsigned(value: Any) -> int:
    """Parse a non-negative integer of any magnitude.

    Raises:
        ValueError: If ``value`` is negative or not an integer literal.
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not integers")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("negative")
        return value
    if isinstance(value, str) and _UNSIGNED.match(value.strip()):
        return int(value.strip())
    raise ValueError(f"not an unsigned integer: {value!r}")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 date-time; naive values are taken as UTC.

    Raises:
        ValueError: If ``value`` cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class QueryCompiler:
    """Validates search parameters and builds OpenSearch query bodies.

    Args:
        settings: Search defaults (language, page size, highlighting...).
    """

    def __init__(self, settings: SearchSettings) -> None:
        self.settings = settings

    # ── Validation ───────────────────────────────────────────────────────

    def compile(self, raw_params: Mapping[str, Any]) -> SearchRequest:
        """Validate raw request parameters into a ``SearchRequest``.

        Args:
            raw_params: Flat parameter mapping, typically the query string.

        Returns:
            The validated request.

        Raises:
            ValidationError: Listing every violated constraint.
        """
        errors: list[str] = []
        fields: dict[str, Any] = {}

        handles = raw_params.get("handles")
        if handles is None:
            errors += ["handles is missing", "handles is empty"]
        else:
            fields["handles"] = _unique(split_list(handles))
            if not fields["handles"]:
                errors.append("handles is empty")
            elif not all(_HANDLE.match(handle) for handle in fields["handles"]):
                errors.append("handles is invalid")

        language = str(raw_params.get("language") or self.settings.default_language).strip().lower()
        if language in SUPPORTED_LANGUAGES:
            fields["language"] = language
        else:
            errors.append("language does not have a valid value")

        query = raw_params.get("query")
        if isinstance(query, str) and query.strip():
            fields["query"] = query.strip()

        for name in ("tags", "ignore_tags"):
            value = raw_params.get(name)
            if value:
                fields[name] = _unique(split_list(value, lowercase=True))

        offset = raw_params.get("offset")
        if offset not in (None, ""):
            try:
                fields["offset"] = parse_unsigned(offset)
            except ValueError:
                errors.append("offset is invalid")

        size = raw_params.get("size")
        if size in (None, ""):
            fields["size"] = self.settings.default_size
        else:
            try:
                fields["size"] = min(parse_unsigned(size), self.settings.max_size)
                if fields["size"] < 1:
                    raise ValueError("size must be positive")
            except ValueError:
                errors.append("size is invalid")

        if "sort_by_date" in raw_params and raw_params["sort_by_date"] is not None:
            try:
                fields["sort_by_date"] = parse_bool(raw_params["sort_by_date"])
            except ValueError:
                errors.append("sort_by_date is invalid")

        for name in ("min_timestamp", "max_timestamp"):
            value = raw_params.get(name)
            if value not in (None, ""):
                try:
                    fields[name] = parse_timestamp(value)
                except (TypeError, ValueError):
                    errors.append(f"{name} is invalid")

        include = raw_params.get("include")
        if include:
            fields["include"] = _unique(split_list(include))
            if not set(fields["include"]) <= set(PROJECTABLE_FIELDS):
                errors.append("include does not have a valid value")

        if errors:
            raise ValidationError(errors)
        return SearchRequest(**fields)

    # ── Query body ───────────────────────────────────────────────────────

    def build_query(self, request: SearchRequest) -> dict[str, Any]:
        """Build the OpenSearch request body for ``request``."""
        keys = LANGUAGE_KEYS[request.language]

        body: dict[str, Any] = {
            "query": {"bool": self._bool_query(request, keys)},
            "from": request.offset,
            "size": request.size,
            "track_total_hits": True,
            "_source": {"includes": self.source_fields(request)},
            "aggs": {
                name: {"terms": {"field": name, "size": self.settings.aggregation_size}}
                for name in AGGREGATION_FIELDS
            },
        }

        if request.sort_by_date:
            body["sort"] = [{TIMESTAMP_FIELD: {"order": "desc"}}, {"_score": {"order": "desc"}}]
        else:
            body["sort"] = [{"_score": {"order": "desc"}}]

        if request.query:
            body["highlight"] = self._highlight(keys)
            body["suggest"] = {
                "text": request.query,
                "suggestion": {
                    "phrase": {
                        "field": SUGGESTION_FIELD,
                        "size": 1,
                        "highlight": {
                            "pre_tag": self.settings.pre_tag,
                            "post_tag": self.settings.post_tag,
                        },
                    }
                },
            }

        return body

    def source_fields(self, request: SearchRequest) -> list[str]:
        """Stored field names to fetch for the projected fields."""
        keys = LANGUAGE_KEYS[request.language]
        return [keys.get(name, name) for name in (request.include or DEFAULT_INCLUDE)]

    def _bool_query(self, request: SearchRequest, keys: dict[str, str]) -> dict[str, Any]:
        if request.query:
            must: dict[str, Any] = {
                "multi_match": {
                    "query": request.query,
                    "fields": [f"{keys['title']}^2", keys["description"], keys["content"]],
                    "type": "best_fields",
                }
            }
        else:
            must = {"match_all": {}}

        filters: list[dict[str, Any]] = [{"term": {"language": request.language}}]
        if request.effective_tags:
            filters.append({"terms": {"tags": request.effective_tags}})

        bounds: dict[str, str] = {}
        if request.min_timestamp:
            bounds["gte"] = request.min_timestamp.isoformat()
        if request.max_timestamp:
            bounds["lte"] = request.max_timestamp.isoformat()
        if bounds:
            filters.append({"range": {TIMESTAMP_FIELD: bounds}})

        clauses: dict[str, Any] = {
            "must": [must],
            "filter": filters,
            "should": [{"term": {"promote": {"value": True, "boost": self.settings.promote_boost}}}],
        }
        if request.ignore_tags:
            clauses["must_not"] = [{"terms": {"tags": request.ignore_tags}}]
        return clauses

    def _highlight(self, keys: dict[str, str]) -> dict[str, Any]:
        fragments = {
            "fragment_size": self.settings.fragment_size,
            "number_of_fragments": self.settings.number_of_fragments,
        }
        return {
            "pre_tags": [self.settings.pre_tag],
            "post_tags": [self.settings.post_tag],
            "fields": {
                keys["title"]: {"number_of_fragments": 0},
                keys["description"]: fragments,
                keys["content"]: fragments,
            },
        }
