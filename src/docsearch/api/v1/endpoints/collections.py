"""Collection endpoints — Admin-only collection lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from docsearch.api.deps import get_engine, require_admin, require_updates_allowed
from docsearch.core.engine import DocSearchEngine
from docsearch.models.collection import CollectionCreate
from docsearch.models.response import ApiMessage, CollectionResponse

router = APIRouter(prefix="/collections", dependencies=[Depends(require_admin)])


@router.post(
    "",
    response_model=ApiMessage,
    status_code=201,
    summary="Create Collection",
    dependencies=[Depends(require_updates_allowed)],
)
async def create_collection(
    payload: CollectionCreate,
    engine: DocSearchEngine = Depends(get_engine),
) -> ApiMessage:
    await engine.collections.create(payload.handle, payload.token)
    return ApiMessage(user_message="Your collection was successfully created.")


@router.get("/{handle}", response_model=CollectionResponse, summary="Get Collection")
async def get_collection(
    handle: str,
    engine: DocSearchEngine = Depends(get_engine),
) -> CollectionResponse:
    """Return the collection with its document count and last write time."""
    return CollectionResponse(collection=await engine.collections.get(handle))


@router.delete(
    "/{handle}",
    response_model=ApiMessage,
    summary="Delete Collection",
    dependencies=[Depends(require_updates_allowed)],
)
async def delete_collection(
    handle: str,
    engine: DocSearchEngine = Depends(get_engine),
) -> ApiMessage:
    await engine.collections.delete(handle)
    return ApiMessage(user_message="Your collection was successfully deleted.")
