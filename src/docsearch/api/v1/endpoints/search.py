"""Search endpoint — Full-text and faceted search across collections."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from docsearch.api.deps import get_engine, require_admin
from docsearch.core.engine import DocSearchEngine
from docsearch.models.search import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/collections/search",
    response_model=SearchResponse,
    summary="Search Collections",
    description=(
        "Search one or more collections in a single request.\n\n"
        "**Query parameters** (all flat strings):\n"
        "| Name | Description |\n"
        "|------|-------------|\n"
        "| `handles` | Required, comma-delimited collection handles; all must exist |\n"
        "| `language` | ISO language code (default from settings) |\n"
        "| `query` | Free-text query |\n"
        "| `tags` / `ignore_tags` | Comma-delimited tags to require (any) / exclude |\n"
        "| `min_timestamp` / `max_timestamp` | Inclusive ISO-8601 bounds on `changed` |\n"
        "| `sort_by_date` | `1`/`true` for newest first, else relevance |\n"
        "| `offset` / `size` | Paging |\n"
        "| `include` | Comma-delimited fields to return |"
    ),
    dependencies=[Depends(require_admin)],
    responses={
        400: {"description": "Invalid parameters, unknown handles, or bad credentials"},
        503: {"description": "Search engine unavailable or timed out (retryable)"},
    },
)
async def search(
    request: Request,
    engine: DocSearchEngine = Depends(get_engine),
) -> SearchResponse:
    """Run a search; parameter validation is done by the query compiler."""
    return await engine.orchestrator.search(dict(request.query_params))
