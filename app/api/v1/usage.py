import logging
from fastapi import APIRouter, Depends, HTTPException, status
from app.api.deps import get_store
from app.schemas.inventory import UsageRequest
from app.schemas.response import SuccessResponse
from app.services.inventory_store import InventoryStore, UsageStatus

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_usage(store: InventoryStore = Depends(get_store)):
    """Consumption history, most recent first."""
    return SuccessResponse(data=[u.model_dump(mode="json") for u in store.usage()])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def record_usage(payload: UsageRequest, store: InventoryStore = Depends(get_store)):
    result = store.record_usage(payload.item_id, payload.quantity)

    if result.status == UsageStatus.UNKNOWN_ITEM:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Inventory item {payload.item_id} not found.")
    if result.status == UsageStatus.INVALID_QUANTITY:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Quantity must be a finite number greater than 0.")

    item = store.get_item(payload.item_id)
    return SuccessResponse(data={
        "entry": result.entry.model_dump(mode="json"),
        "remaining_quantity": item.quantity if item else None,
    })
