from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class InventoryItemRequest(BaseModel):
    """Schema for adding a new item to the kitchen inventory."""
    id: Optional[str] = Field(None, description="Stable identifier. Generated when omitted.")
    name: str = Field(..., min_length=1, description="Display name (e.g., Bacalao Giraldo).")
    category: str = Field(..., description="Free-text grouping label (e.g., Pescados).")
    quantity: float = Field(..., ge=0, description="Current stock, in `unit`.")
    unit: str = Field(..., description="Unit of measure (kg, L, piezas...).")
    min_threshold: float = Field(..., ge=0, description="Stock level at or below which an alert is raised.")
    expiry_date: Optional[date] = None
    price_per_unit: Optional[float] = Field(None, ge=0)


class InventoryItemUpdate(BaseModel):
    """Partial update; only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    min_threshold: Optional[float] = Field(None, ge=0)
    expiry_date: Optional[date] = None
    price_per_unit: Optional[float] = Field(None, ge=0)


class InventoryItemResponse(BaseModel):
    id: str
    name: str
    category: str
    quantity: float
    unit: str
    min_threshold: float
    expiry_date: Optional[date]
    price_per_unit: Optional[float]
    last_updated: datetime
    is_low_stock: bool
    stock_value: float


class UsageRequest(BaseModel):
    """Schema for recording a consumption event."""
    item_id: str
    quantity: float = Field(..., description="Amount consumed, in the item's unit. Must be > 0.")
