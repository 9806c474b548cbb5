from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence
from app.models.inventory import InventoryItem
from app.models.notification import AppNotification, NotificationType, alert_id_for, ALERT_ID_PREFIX

LOW_STOCK_TITLE = "Stock Crítico"


def format_quantity(value: float) -> str:
    """Renders 2.0 as '2' and 12.5 as '12.5', without rounding or exponents."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def build_low_stock_alert(item: InventoryItem, now: datetime) -> AppNotification:
    return AppNotification(
        id=alert_id_for(item.id),
        type=NotificationType.CRITICAL,
        title=LOW_STOCK_TITLE,
        message=(
            f"El producto {item.name} ha alcanzado el umbral mínimo "
            f"({format_quantity(item.quantity)} {item.unit} restantes)."
        ),
        timestamp=now,
        is_read=False,
    )


def derive_notifications(
    items: Iterable[InventoryItem],
    existing: Sequence[AppNotification],
    prune_resolved: bool = False,
    now: Optional[datetime] = None,
) -> List[AppNotification]:
    """
    One derivation pass over an inventory snapshot.

    Every low-stock item yields an alert candidate. Candidates whose id is not in
    `existing` are prepended in inventory order; ids already present are kept as they
    are, so read state and original timestamp survive the pass.

    With `prune_resolved`, low-stock alerts whose item recovered (or no longer
    exists) are dropped. Without it they stay in the sequence.
    """
    now = now or datetime.now(timezone.utc)
    existing_ids = {n.id for n in existing}

    low_stock_ids = set()
    new_alerts = []
    for item in items:
        if not item.is_low_stock:
            continue
        alert_id = alert_id_for(item.id)
        low_stock_ids.add(alert_id)
        if alert_id not in existing_ids:
            new_alerts.append(build_low_stock_alert(item, now))

    kept = list(existing)
    if prune_resolved:
        kept = [
            n for n in kept
            if not n.id.startswith(ALERT_ID_PREFIX) or n.id in low_stock_ids
        ]

    return new_alerts + kept


def mark_all_read(notifications: Sequence[AppNotification]) -> List[AppNotification]:
    return [n if n.is_read else n.model_copy(update={"is_read": True}) for n in notifications]
