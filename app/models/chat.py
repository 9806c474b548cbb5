from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from .inventory import InventoryItem


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    text: str


class ChatCompletionRequest(BaseModel):
    """Everything the model needs to answer one chat turn."""
    message: str
    history: List[ChatMessage] = Field(default_factory=list)
    inventory_snapshot: List[InventoryItem] = Field(default_factory=list)
    deep_reasoning: bool = False
