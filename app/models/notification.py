from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict


class NotificationType(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


ALERT_ID_PREFIX = "alert-"


def alert_id_for(item_id: str) -> str:
    """Low-stock alerts are keyed by item so that re-deriving never duplicates them."""
    return f"{ALERT_ID_PREFIX}{item_id}"


class AppNotification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    is_read: bool = False
