# scripts/seed_data.py
from datetime import datetime, timezone
from typing import List
from app.models.inventory import InventoryItem
from app.models.supplier import Supplier
from app.models.usage import UsageHistory
from app.services.inventory_store import InventoryStore


def initial_inventory() -> List[InventoryItem]:
    now = datetime.now(timezone.utc)
    return [
        InventoryItem(id="1", name="Jamón Ibérico 5J", category="Ibéricos", quantity=4.2, unit="piezas", min_threshold=2, price_per_unit=450, last_updated=now),
        InventoryItem(id="2", name="AOVE Picual Premium", category="Aceites", quantity=45, unit="L", min_threshold=20, price_per_unit=12, last_updated=now),
        InventoryItem(id="3", name="Queso Manchego DOP", category="Lácteos", quantity=3, unit="ruedas", min_threshold=2, price_per_unit=85, last_updated=now),
        InventoryItem(id="4", name="Bacalao Giraldo", category="Pescados", quantity=18, unit="kg", min_threshold=10, price_per_unit=24, last_updated=now),
        InventoryItem(id="5", name="Vino Rioja Alta 890", category="Bodega", quantity=12, unit="botellas", min_threshold=18, price_per_unit=145, last_updated=now),
    ]


def initial_usage() -> List[UsageHistory]:
    # Most recent first
    return [
        UsageHistory(id="h3", item_id="4", item_name="Bacalao Giraldo", date=datetime(2024, 5, 19, tzinfo=timezone.utc), quantity_consumed=5.5, unit="kg"),
        UsageHistory(id="h2", item_id="1", item_name="Jamón Ibérico 5J", date=datetime(2024, 5, 19, tzinfo=timezone.utc), quantity_consumed=0.4, unit="piezas"),
        UsageHistory(id="h1", item_id="1", item_name="Jamón Ibérico 5J", date=datetime(2024, 5, 18, tzinfo=timezone.utc), quantity_consumed=0.2, unit="piezas"),
    ]


SUPPLIERS: List[Supplier] = [
    Supplier(id="s1", name="Bodegas Selectas", contact="pedidos@bodegas.es", phone="34600112233", category="Bodega", reliability=98),
    Supplier(id="s2", name="Distribución Gourmet", contact="info@gourmet.es", phone="34655443322", category="Ibéricos", reliability=95),
    Supplier(id="s3", name="Huerta Real", contact="ventas@huerta.es", phone="34611223344", category="Perecederos", reliability=92),
]


def build_store(seed: bool = True) -> InventoryStore:
    """Creates the session store, loaded with the demo kitchen unless `seed` is off."""
    if not seed:
        return InventoryStore()
    return InventoryStore(items=initial_inventory(), usage=initial_usage())


def main():
    store = build_store()
    print("Inventory seeded:")
    for item in store.items():
        print(f"  {item.id}: {item.name} {item.quantity:g} {item.unit} (min {item.min_threshold:g})")
    print(f"Low-stock alerts: {[n.id for n in store.notifications()]}")


if __name__ == "__main__":
    main()
