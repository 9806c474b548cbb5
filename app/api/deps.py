from fastapi import Request
from app.services.assistant_service import AssistantService
from app.services.inventory_store import InventoryStore


def get_store(request: Request) -> InventoryStore:
    """The session store created in the application lifespan."""
    return request.app.state.store


def get_assistant(request: Request) -> AssistantService:
    return request.app.state.assistant
