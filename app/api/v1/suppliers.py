from typing import Optional
from fastapi import APIRouter
from app.schemas.response import SuccessResponse
from app.schemas.supplier import SupplierResponse
from app.scripts.seed_data import SUPPLIERS

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_suppliers(category: Optional[str] = None):
    """Supplier cards, each with its WhatsApp ordering link."""
    suppliers = [s for s in SUPPLIERS if not category or s.category == category]
    return SuccessResponse(data=[
        SupplierResponse(**s.model_dump(), whatsapp_url=s.whatsapp_url).model_dump()
        for s in suppliers
    ])
