from datetime import date, datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InventoryItem(BaseModel):
    """
    One stocked ingredient or product. Instances are frozen: the store replaces
    the whole value on every mutation, so a snapshot handed to a view never changes.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    quantity: float = Field(..., ge=0)
    unit: str  # e.g. "kg", "L", "piezas"
    min_threshold: float = Field(..., ge=0) # Reorder trigger level
    expiry_date: Optional[date] = None
    price_per_unit: Optional[float] = Field(None, ge=0)
    last_updated: datetime = Field(default_factory=_now)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_threshold

    @property
    def stock_value(self) -> float:
        return self.quantity * (self.price_per_unit or 0)
