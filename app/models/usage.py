from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class UsageHistory(BaseModel):
    """A single consumption event. Immutable once recorded."""
    model_config = ConfigDict(frozen=True)

    id: str
    item_id: str
    item_name: str # Copied from the item when the usage was recorded
    date: datetime
    quantity_consumed: float = Field(..., gt=0)
    unit: str
