import pytest
from datetime import date, datetime, timedelta, timezone

from app.core.exceptions import DuplicateItemError, InventoryError, ItemNotFoundError
from app.models.inventory import InventoryItem
from app.scripts.seed_data import build_store
from app.services.inventory_store import InventoryStore, UsageStatus


@pytest.fixture
def store():
    """The demo kitchen: only the Rioja (12 of min 18) starts below threshold."""
    return build_store()


def test_seeded_store_has_one_alert(store):
    notifications = store.notifications()
    assert [n.id for n in notifications] == ["alert-5"]
    assert notifications[0].is_read is False


class TestRecordUsage:
    def test_usage_decrements_stock_and_prepends_history(self, store):
        old_updated = store.get_item("4").last_updated
        history_before = store.usage()

        result = store.record_usage("4", 5.5)

        assert result.ok
        item = store.get_item("4")
        assert item.quantity == 12.5
        assert item.last_updated >= old_updated

        history = store.usage()
        assert len(history) == len(history_before) + 1
        head = history[0]
        assert head == result.entry
        assert head.item_id == "4"
        assert head.item_name == "Bacalao Giraldo"
        assert head.quantity_consumed == 5.5
        assert head.unit == "kg"
        assert history[1:] == history_before

    def test_usage_is_floored_at_zero(self, store):
        result = store.record_usage("3", 10)

        assert result.status == UsageStatus.RECORDED
        assert store.get_item("3").quantity == 0
        assert store.usage()[0].quantity_consumed == 10

    @pytest.mark.parametrize("quantity", [0, -1, -0.5, float("nan"), float("inf"), True, "2", None])
    def test_invalid_quantity_changes_nothing(self, store, quantity):
        items_before = store.items()
        usage_before = store.usage()

        result = store.record_usage("4", quantity)

        assert result.status == UsageStatus.INVALID_QUANTITY
        assert result.entry is None
        assert store.items() == items_before
        assert store.usage() == usage_before

    def test_unknown_item_changes_nothing(self, store):
        items_before = store.items()
        usage_before = store.usage()

        result = store.record_usage("does-not-exist", 1)

        assert result.status == UsageStatus.UNKNOWN_ITEM
        assert not result.ok
        assert store.items() == items_before
        assert store.usage() == usage_before

    def test_usage_below_threshold_raises_alert_immediately(self, store):
        """Queso Manchego: 3 ruedas, min 2"""
        store.record_usage("3", 1)

        notifications = store.notifications()
        assert [n.id for n in notifications] == ["alert-3", "alert-5"]
        assert "Queso Manchego DOP" in notifications[0].message
        assert "(2 ruedas restantes)" in notifications[0].message

    def test_snapshots_are_not_affected_by_later_mutations(self, store):
        snapshot = store.get_item("4")

        store.record_usage("4", 1)

        assert snapshot.quantity == 18
        assert store.get_item("4").quantity == 17


class TestNotifications:
    def test_mark_all_as_read_then_rederive_keeps_alerts_read(self, store):
        store.mark_all_as_read()

        # Any mutation runs a derivation pass; Rioja is still low
        store.record_usage("2", 1)

        assert store.notifications()
        assert all(n.is_read for n in store.notifications())

    def test_stale_alert_is_kept_after_restock(self, store):
        store.record_usage("3", 1)
        store.update_item("3", {"quantity": 5})

        assert "alert-3" in [n.id for n in store.notifications()]

    def test_stale_alert_is_pruned_when_configured(self):
        store = InventoryStore(
            items=[InventoryItem(id="3", name="Queso", category="Lácteos", quantity=2, unit="ruedas", min_threshold=2)],
            prune_resolved_alerts=True,
        )
        assert [n.id for n in store.notifications()] == ["alert-3"]

        store.update_item("3", {"quantity": 5})

        assert store.notifications() == []


class TestItemLifecycle:
    def test_remove_item_keeps_usage_history(self, store):
        usage_before = store.usage()

        assert store.remove_item("1") is True

        assert store.get_item("1") is None
        assert store.usage() == usage_before
        assert any(u.item_id == "1" for u in store.usage())

    def test_remove_unknown_item_is_noop(self, store):
        items_before = store.items()

        assert store.remove_item("nope") is False
        assert store.items() == items_before

    def test_add_item_runs_derivation(self, store):
        item = InventoryItem(id="6", name="Azafrán", category="Especias", quantity=0.01, unit="kg", min_threshold=0.05)

        store.add_item(item)

        assert store.get_item("6") == item
        assert store.notifications()[0].id == "alert-6"

    def test_add_duplicate_item_is_rejected(self, store):
        duplicate = InventoryItem(id="1", name="Otro", category="X", quantity=1, unit="kg", min_threshold=0)

        with pytest.raises(DuplicateItemError):
            store.add_item(duplicate)

        assert store.get_item("1").name == "Jamón Ibérico 5J"

    def test_update_item_applies_partial_changes(self, store):
        updated = store.update_item("2", {"quantity": 10, "expiry_date": date(2030, 1, 1)})

        assert updated.quantity == 10
        assert updated.expiry_date == date(2030, 1, 1)
        assert updated.name == "AOVE Picual Premium"
        assert store.notifications()[0].id == "alert-2"

    def test_update_unknown_item(self, store):
        with pytest.raises(ItemNotFoundError):
            store.update_item("nope", {"quantity": 1})

    def test_update_rejects_unknown_fields(self, store):
        with pytest.raises(InventoryError) as excinfo:
            store.update_item("2", {"id": "99"})
        assert "id" in str(excinfo.value)

    def test_update_rejects_negative_quantity(self, store):
        with pytest.raises(InventoryError):
            store.update_item("2", {"quantity": -3})
        assert store.get_item("2").quantity == 45


class TestInventoryView:
    def test_default_sort_is_by_name(self, store):
        assert [i.id for i in store.list_items()] == ["2", "4", "1", "3", "5"]

    def test_search_is_case_insensitive(self, store):
        assert [i.name for i in store.list_items(search="JAMÓN")] == ["Jamón Ibérico 5J"]

    def test_category_filter(self, store):
        assert [i.id for i in store.list_items(category="Bodega")] == ["5"]
        assert len(store.list_items(category="All")) == 5

    def test_sort_by_quantity(self, store):
        assert [i.id for i in store.list_items(sort_by="quantity")] == ["3", "1", "5", "4", "2"]

    def test_sort_by_expiry_puts_undated_items_last(self, store):
        store.update_item("4", {"expiry_date": date(2024, 6, 1)})
        store.update_item("3", {"expiry_date": date(2024, 5, 25)})

        assert [i.id for i in store.list_items(sort_by="expiry")][:2] == ["3", "4"]

    def test_unknown_sort_key(self, store):
        with pytest.raises(InventoryError):
            store.list_items(sort_by="price")

    def test_categories_in_insertion_order(self, store):
        assert store.categories() == ["All", "Ibéricos", "Aceites", "Lácteos", "Pescados", "Bodega"]


class TestStats:
    def test_seeded_stats(self, store):
        stats = store.stats(today=date(2024, 5, 20))

        assert stats.total_value == pytest.approx(4857)
        assert stats.critical_items == 1
        assert stats.unread_notifications == 1
        assert stats.expiring_soon == 0

    def test_expiring_soon_window(self, store):
        today = date(2024, 5, 20)
        store.update_item("1", {"expiry_date": today + timedelta(days=3)})
        store.update_item("2", {"expiry_date": today - timedelta(days=1)})
        store.update_item("3", {"expiry_date": today + timedelta(days=30)})

        assert store.stats(today=today).expiring_soon == 2

    def test_expiring_soon_includes_last_day_of_window(self, store):
        today = date(2024, 5, 20)
        store.update_item("1", {"expiry_date": today + timedelta(days=7)})
        store.update_item("2", {"expiry_date": today + timedelta(days=8)})

        assert store.stats(today=today).expiring_soon == 1

    def test_missing_price_counts_as_zero(self):
        store = InventoryStore(items=[
            InventoryItem(id="a", name="Sal", category="Despensa", quantity=10, unit="kg", min_threshold=1),
        ])
        assert store.stats().total_value == 0

    def test_unread_count_drops_after_mark_all(self, store):
        store.mark_all_as_read()
        assert store.stats().unread_notifications == 0


def test_duplicate_seed_ids_are_rejected():
    item = InventoryItem(id="1", name="A", category="X", quantity=1, unit="kg", min_threshold=0,
                         last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc))
    with pytest.raises(DuplicateItemError):
        InventoryStore(items=[item, item])
