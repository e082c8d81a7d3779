"""API v1 Router — Search, collection, document and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from docsearch.api.v1.endpoints.collections import router as collections_router
from docsearch.api.v1.endpoints.documents import router as documents_router
from docsearch.api.v1.endpoints.health import router as health_router
from docsearch.api.v1.endpoints.search import router as search_router

router = APIRouter(tags=["v1"])
# Search first: /collections/search must win over /collections/{handle}
router.include_router(search_router)
router.include_router(collections_router)
router.include_router(documents_router)
router.include_router(health_router)
