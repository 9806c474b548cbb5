from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.response import SuccessResponse
from app.services.inventory_store import InventoryStore

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_notifications(store: InventoryStore = Depends(get_store)):
    notifications = store.notifications()
    return SuccessResponse(data={
        "unread": sum(1 for n in notifications if not n.is_read),
        "notifications": [n.model_dump(mode="json") for n in notifications],
    })


@router.post("/read-all", response_model=SuccessResponse)
async def mark_all_as_read(store: InventoryStore = Depends(get_store)):
    notifications = store.mark_all_as_read()
    return SuccessResponse(data=[n.model_dump(mode="json") for n in notifications])
