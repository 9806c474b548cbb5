import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from app.api.deps import get_store
from app.models.inventory import InventoryItem
from app.schemas.inventory import InventoryItemRequest, InventoryItemResponse, InventoryItemUpdate
from app.schemas.response import SuccessResponse
from app.services.inventory_store import InventoryStore

log = logging.getLogger("uvicorn")

router = APIRouter()


def to_response(item: InventoryItem) -> dict:
    return InventoryItemResponse(
        **item.model_dump(),
        is_low_stock=item.is_low_stock,
        stock_value=item.stock_value,
    ).model_dump(mode="json")


@router.get("", response_model=SuccessResponse)
async def list_inventory(
    search: str = "",
    category: Optional[str] = None,
    sort_by: str = Query("name", pattern="^(name|quantity|expiry)$"),
    store: InventoryStore = Depends(get_store),
):
    """Inventory table: name search, category filter ('All' for every category) and sorting."""
    items = store.list_items(search=search, category=category, sort_by=sort_by)
    return SuccessResponse(data=[to_response(i) for i in items])


@router.get("/categories", response_model=SuccessResponse)
async def list_categories(store: InventoryStore = Depends(get_store)):
    return SuccessResponse(data=store.categories())


@router.get("/{item_id}", response_model=SuccessResponse)
async def get_item(item_id: str, store: InventoryStore = Depends(get_store)):
    item = store.get_item(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found.")
    return SuccessResponse(data=to_response(item))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_item(item_data: InventoryItemRequest, store: InventoryStore = Depends(get_store)):
    """
    Adds a new stocked product. An id is generated when the request does not
    bring one; reusing an existing id is rejected with 409.
    """
    fields = item_data.model_dump()
    fields["id"] = fields["id"] or uuid.uuid4().hex[:9]
    item = store.add_item(InventoryItem(**fields))
    log.info(f"Item '{item.name}' added with id {item.id}.")
    return SuccessResponse(data=to_response(item))


@router.patch("/{item_id}", response_model=SuccessResponse)
async def update_item(item_id: str, changes: InventoryItemUpdate, store: InventoryStore = Depends(get_store)):
    """Corrects stock, threshold, expiry or price of an item (e.g. after reading a receipt)."""
    item = store.update_item(item_id, changes.model_dump(exclude_unset=True))
    return SuccessResponse(data=to_response(item))


@router.delete("/{item_id}", response_model=SuccessResponse)
async def remove_item(item_id: str, store: InventoryStore = Depends(get_store)):
    if not store.remove_item(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found.")
    return SuccessResponse(data={"removed": item_id})
