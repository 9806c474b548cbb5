import logging
from contextlib import contextmanager
from typing import List, Optional
from app.core.config import CHAT_FALLBACK, IMAGE_FALLBACK, SUGGESTION_FALLBACK
from app.models.chat import ChatCompletionRequest, ChatMessage, ChatRole
from app.services.inventory_store import InventoryStore

log = logging.getLogger("assistant_service")

IMAGE_UPLOADED_TEXT = "[Imagen subida]"


class _Interaction:
    """Counts requests in flight; loading until the last one returns."""

    def __init__(self):
        self._pending = 0

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    @contextmanager
    def pending(self):
        self._pending += 1
        try:
            yield
        finally:
            self._pending -= 1


class ChatSession(_Interaction):
    """
    Conversation shown in the assistant panel.

    `generation` changes on every reset; a reply that comes back for an older
    generation belongs to a conversation that no longer exists and is dropped.
    """

    def __init__(self):
        super().__init__()
        self.messages: List[ChatMessage] = []
        self.generation = 0

    def append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text)
        self.messages = self.messages + [message]
        return message

    def reset(self):
        self.messages = []
        self.generation += 1


class SuggestionState(_Interaction):
    def __init__(self):
        super().__init__()
        self.text: Optional[str] = None

    def clear(self):
        self.text = None


class AssistantService:
    """
    Forwards chat turns, order-suggestion requests and images to the model client.
    Results are only displayed or appended to the chat; they never modify the
    inventory. Any failure is replaced by a fixed fallback text.
    """

    def __init__(self, client, store: InventoryStore):
        self.client = client
        self.store = store
        self.chat = ChatSession()
        self.suggestion = SuggestionState()

    async def send_message(self, text: str, deep_reasoning: bool = False) -> Optional[ChatMessage]:
        """Returns the model reply, or None for blank input or a reply to a reset conversation."""
        if not text or not text.strip():
            return None

        request = ChatCompletionRequest(
            message=text,
            history=list(self.chat.messages),
            inventory_snapshot=self.store.items(),
            deep_reasoning=deep_reasoning,
        )
        self.chat.append(ChatRole.USER, text)
        generation = self.chat.generation

        with self.chat.pending():
            reply = await self._call(self.client.chat_with_inventory, CHAT_FALLBACK, request)

        if generation != self.chat.generation:
            log.info("Dropping chat reply for a conversation that was reset.")
            return None
        return self.chat.append(ChatRole.MODEL, reply)

    async def suggest_orders(self) -> str:
        with self.suggestion.pending():
            text = await self._call(
                self.client.suggest_daily_orders,
                SUGGESTION_FALLBACK,
                self.store.items(),
                self.store.usage(),
            )
        self.suggestion.text = text
        return text

    async def analyze_image(self, image_base64: str, mime_type: str) -> Optional[str]:
        generation = self.chat.generation
        with self.chat.pending():
            analysis = await self._call(self.client.analyze_kitchen_image, IMAGE_FALLBACK, image_base64, mime_type)

        if generation != self.chat.generation:
            log.info("Dropping image analysis for a conversation that was reset.")
            return None
        self.chat.append(ChatRole.USER, IMAGE_UPLOADED_TEXT)
        self.chat.append(ChatRole.MODEL, analysis)
        return analysis

    def reset_chat(self):
        self.chat.reset()

    async def _call(self, func, fallback: str, *args) -> str:
        name = getattr(func, "__name__", "model call")
        try:
            text = await func(*args)
        except Exception as e:
            log.warning(f"Model call {name} failed: {e}")
            return fallback
        if not text or not text.strip():
            log.warning(f"Model call {name} returned no text.")
            return fallback
        return text
