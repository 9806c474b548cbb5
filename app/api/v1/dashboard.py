from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.response import SuccessResponse
from app.services.inventory_store import InventoryStore

router = APIRouter()


@router.get("/stats", response_model=SuccessResponse)
async def dashboard_stats(store: InventoryStore = Depends(get_store)):
    """Stock value, critical items, unread alerts and products close to expiry."""
    return SuccessResponse(data=store.stats().model_dump())
