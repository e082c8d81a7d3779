"""Document endpoints — Push documents into the authenticated collection.

Clients authenticate with HTTP basic auth as ``handle:token``.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from docsearch.api.deps import get_engine, require_collection, require_updates_allowed
from docsearch.core.engine import DocSearchEngine
from docsearch.models.document import DocumentCreate, DocumentUpdate
from docsearch.models.response import ApiMessage

router = APIRouter(prefix="/documents", dependencies=[Depends(require_updates_allowed)])


@router.post("", response_model=ApiMessage, status_code=201, summary="Create Document")
async def create_document(
    payload: DocumentCreate,
    handle: str = Depends(require_collection),
    engine: DocSearchEngine = Depends(get_engine),
) -> ApiMessage:
    await engine.documents.create(handle, payload.document_id, payload.to_fields())
    return ApiMessage(user_message="Your document was successfully created.")


@router.put("/{document_id}", response_model=ApiMessage, summary="Update Document")
async def update_document(
    document_id: str,
    payload: DocumentUpdate,
    handle: str = Depends(require_collection),
    engine: DocSearchEngine = Depends(get_engine),
) -> ApiMessage:
    """Merge the sent fields into the stored document."""
    await engine.documents.update(handle, document_id, payload.to_fields())
    return ApiMessage(user_message="Your document was successfully updated.")


@router.delete("/{document_id}", response_model=ApiMessage, summary="Delete Document")
async def delete_document(
    document_id: str,
    handle: str = Depends(require_collection),
    engine: DocSearchEngine = Depends(get_engine),
) -> ApiMessage:
    await engine.documents.delete(handle, document_id)
    return ApiMessage(user_message="Your document was successfully deleted.")
