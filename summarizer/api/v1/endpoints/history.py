"""History endpoints (list, save, delete)."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from summarizer.core.logging import logger
from summarizer.schemas import DeleteResponse, HistoryItemResponse, HistoryListResponse
from summarizer.services.history_service import HistoryStore
from summarizer.services.pipeline import get_history_store

router = APIRouter()


@router.get("", response_model=HistoryListResponse)
async def list_history(store: HistoryStore = Depends(get_history_store)):
    """List saved summaries, oldest first."""
    return {"history": [item.to_dict() for item in store.list()]}


@router.post("", response_model=HistoryItemResponse)
async def save_history(
    record: Any = Body(...),
    store: HistoryStore = Depends(get_history_store),
):
    """Save an arbitrary summary record. `id` and `createdAt` are assigned here."""
    if not isinstance(record, dict):
        raise HTTPException(status_code=400, detail="History item must be a JSON object")

    item = store.save(record)
    logger.info(f"History item saved: {item.id}")
    return {"item": item.to_dict()}


@router.delete("/{item_id}", response_model=DeleteResponse)
async def delete_history(
    item_id: str,
    store: HistoryStore = Depends(get_history_store),
):
    """Delete a history item. Deleting an unknown id is a no-op."""
    removed = store.delete_by_id(item_id)
    if removed:
        logger.info(f"History item deleted: {item_id}")
    else:
        logger.info(f"History item not found (no-op delete): {item_id}")
    return {"success": True, "removed": removed}
