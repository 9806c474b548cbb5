class InventoryError(Exception):
    """Base class for rejected inventory operations."""
    status_code = 400
    code = "inventory_error"


class ItemNotFoundError(InventoryError):
    status_code = 404
    code = "item_not_found"

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Inventory item {item_id} not found.")


class DuplicateItemError(InventoryError):
    status_code = 409
    code = "duplicate_item"

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Inventory item {item_id} already exists.")


class ModelServiceError(Exception):
    """The generative model call failed or returned nothing usable."""
