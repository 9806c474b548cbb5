# app/models/__init__.py
from .inventory import InventoryItem
from .usage import UsageHistory
from .notification import AppNotification, NotificationType, alert_id_for
from .supplier import Supplier
from .chat import ChatCompletionRequest, ChatMessage, ChatRole

# Export all models
__all__ = [
    "AppNotification",
    "ChatCompletionRequest",
    "ChatMessage",
    "ChatRole",
    "InventoryItem",
    "NotificationType",
    "Supplier",
    "UsageHistory",
    "alert_id_for",
]
