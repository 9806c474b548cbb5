import logging
import math
import threading
import uuid
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
from pydantic import BaseModel, ValidationError
from app.core.config import EXPIRY_WARNING_DAYS, PRUNE_RESOLVED_ALERTS
from app.core.exceptions import DuplicateItemError, InventoryError, ItemNotFoundError
from app.models.inventory import InventoryItem
from app.models.notification import AppNotification
from app.models.usage import UsageHistory
from app.services.alert_deriver import derive_notifications, mark_all_read

log = logging.getLogger("inventory_store")

ALL_CATEGORIES = "All"
SORT_KEYS = ("name", "quantity", "expiry")

# Fields a caller may change through update_item
UPDATABLE_FIELDS = {"name", "category", "quantity", "unit", "min_threshold", "expiry_date", "price_per_unit"}


class UsageStatus(str, Enum):
    RECORDED = "recorded"
    UNKNOWN_ITEM = "unknown_item"
    INVALID_QUANTITY = "invalid_quantity"


class UsageResult(BaseModel):
    status: UsageStatus
    entry: Optional[UsageHistory] = None

    @property
    def ok(self) -> bool:
        return self.status == UsageStatus.RECORDED


class InventoryStats(BaseModel):
    total_value: float
    critical_items: int
    unread_notifications: int
    expiring_soon: int


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _is_valid_quantity(quantity: Any) -> bool:
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        return False
    return math.isfinite(quantity) and quantity > 0


class InventoryStore:
    """
    Owns the item mapping, the usage history (newest first) and the notification
    sequence. Every mutation replaces whole values and finishes with a derivation
    pass while the lock is still held, so readers never see stale alerts.
    """

    def __init__(
        self,
        items: Iterable[InventoryItem] = (),
        usage: Iterable[UsageHistory] = (),
        prune_resolved_alerts: bool = PRUNE_RESOLVED_ALERTS,
    ):
        self._lock = threading.RLock()
        self._items: Dict[str, InventoryItem] = {}
        for item in items:
            if item.id in self._items:
                raise DuplicateItemError(item.id)
            self._items[item.id] = item
        self._usage: List[UsageHistory] = list(usage)
        self._notifications: List[AppNotification] = []
        self.prune_resolved_alerts = prune_resolved_alerts
        self._derive()

    # --- Snapshots ---

    def items(self) -> List[InventoryItem]:
        with self._lock:
            return list(self._items.values())

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        with self._lock:
            return self._items.get(item_id)

    def usage(self) -> List[UsageHistory]:
        with self._lock:
            return list(self._usage)

    def notifications(self) -> List[AppNotification]:
        with self._lock:
            return list(self._notifications)

    # --- Mutations ---

    def record_usage(self, item_id: str, quantity: float) -> UsageResult:
        """
        Consumes `quantity` of an item. Stock is floored at zero and the event is
        prepended to the history. Unknown items and non-positive or non-finite
        quantities are rejected without touching any state.
        """
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                log.warning(f"Usage rejected: item {item_id} does not exist.")
                return UsageResult(status=UsageStatus.UNKNOWN_ITEM)
            if not _is_valid_quantity(quantity):
                log.warning(f"Usage rejected: invalid quantity {quantity!r} for item {item_id}.")
                return UsageResult(status=UsageStatus.INVALID_QUANTITY)

            now = _now()
            self._items[item_id] = item.model_copy(update={
                "quantity": max(0.0, item.quantity - quantity),
                "last_updated": now,
            })
            entry = UsageHistory(
                id=uuid.uuid4().hex,
                item_id=item_id,
                item_name=item.name,
                date=now,
                quantity_consumed=quantity,
                unit=item.unit,
            )
            self._usage = [entry] + self._usage
            self._derive()

        log.info(f"Recorded usage of {quantity} {item.unit} for {item.name}.")
        return UsageResult(status=UsageStatus.RECORDED, entry=entry)

    def remove_item(self, item_id: str) -> bool:
        """Deletes an item if present. Past usage entries referencing it are kept."""
        with self._lock:
            if item_id not in self._items:
                return False
            items = dict(self._items)
            removed = items.pop(item_id)
            self._items = items
            self._derive()
        log.info(f"Removed inventory item {removed.name} ({item_id}).")
        return True

    def add_item(self, item: InventoryItem) -> InventoryItem:
        with self._lock:
            if item.id in self._items:
                raise DuplicateItemError(item.id)
            self._items = {**self._items, item.id: item}
            self._derive()
        log.info(f"Added inventory item {item.name} ({item.id}).")
        return item

    def update_item(self, item_id: str, changes: Dict[str, Any]) -> InventoryItem:
        """
        Applies a partial update to an existing item and refreshes last_updated.
        This is the entry point for corrections coming from receipts or image
        analysis; nothing calls it automatically.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise InventoryError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                raise ItemNotFoundError(item_id)
            try:
                updated = InventoryItem.model_validate(
                    {**item.model_dump(), **changes, "last_updated": _now()}
                )
            except ValidationError as e:
                raise InventoryError(f"Invalid update for item {item_id}: {e}") from e
            self._items = {**self._items, item_id: updated}
            self._derive()

        log.info(f"Updated inventory item {item_id}: {sorted(changes)}")
        return updated

    def mark_all_as_read(self) -> List[AppNotification]:
        with self._lock:
            self._notifications = mark_all_read(self._notifications)
            return list(self._notifications)

    def _derive(self):
        self._notifications = derive_notifications(
            self._items.values(),
            self._notifications,
            prune_resolved=self.prune_resolved_alerts,
        )

    # --- Derived views ---

    def list_items(
        self,
        search: str = "",
        category: Optional[str] = None,
        sort_by: str = "name",
    ) -> List[InventoryItem]:
        """Search by name, filter by category and sort, as the inventory table does."""
        if sort_by not in SORT_KEYS:
            raise InventoryError(f"Unknown sort key '{sort_by}'. Use one of: {', '.join(SORT_KEYS)}")

        term = (search or "").lower()
        result = [i for i in self.items() if term in i.name.lower()]
        if category and category != ALL_CATEGORIES:
            result = [i for i in result if i.category == category]

        if sort_by == "name":
            return sorted(result, key=lambda i: i.name.casefold())
        if sort_by == "quantity":
            return sorted(result, key=lambda i: i.quantity)
        return sorted(result, key=lambda i: i.expiry_date.isoformat() if i.expiry_date else "9999")

    def categories(self) -> List[str]:
        seen = dict.fromkeys(i.category for i in self.items())
        return [ALL_CATEGORIES, *seen]

    def stats(self, today: Optional[date] = None) -> InventoryStats:
        today = today or date.today()
        horizon = today + timedelta(days=EXPIRY_WARNING_DAYS)
        with self._lock:
            items = list(self._items.values())
            notifications = list(self._notifications)
        return InventoryStats(
            total_value=sum(i.stock_value for i in items),
            critical_items=sum(1 for i in items if i.is_low_stock),
            unread_notifications=sum(1 for n in notifications if not n.is_read),
            expiring_soon=sum(1 for i in items if i.expiry_date and i.expiry_date <= horizon),
        )
