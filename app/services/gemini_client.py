import json
import logging
from typing import Any, Dict, List, Optional, Sequence
import requests
from fastapi.concurrency import run_in_threadpool
from app.core.config import (
    CHAT_THINKING_BUDGET,
    GEMINI_API_KEY,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    MODEL_TIMEOUT,
    SUGGESTION_THINKING_BUDGET,
)
from app.core.exceptions import ModelServiceError
from app.models.chat import ChatCompletionRequest, ChatRole
from app.models.inventory import InventoryItem
from app.models.usage import UsageHistory

log = logging.getLogger("gemini_client")

CHAT_SYSTEM_INSTRUCTION = """
### ROL
Actúa como un analista experto en gestión de inventarios.

### CRITERIOS DE ANÁLISIS
Focalízate exclusivamente en ítems que:
1. Estén próximos a caducar.
2. Presenten un exceso de stock.

### REGLAS DE COMUNICACIÓN (OBLIGATORIAS)
- **Idioma:** Responder SIEMPRE en español de España (neutro, sin modismos latinos).
- **Tono:** Sofisticado, profesional y analítico. Evita el lenguaje coloquial.
- **Enfoque:** Prioriza la precisión y la propuesta de soluciones estratégicas.

Contexto del inventario: Inventario Actual: {inventory}"""

SUGGESTION_PROMPT = """Analiza los siguientes datos operativos:
    - Inventario: {inventory}
    - Historial de Gasto Reciente: {usage}

    TAREA:
    1. Detecta anomalías en el consumo (ej. gasto excesivo de aceite).
    2. Cruza el stock actual con el mínimo y el gasto promedio.
    3. Genera una orden de compra detallada para HOY.
    4. Proporciona un consejo de ahorro de costes basado en los precios unitarios.

    Responde en español con formato Markdown elegante."""

IMAGE_PROMPT = """Actúa como un escáner inteligente OCR para cocinas. Extrae:
    - Nombre del producto.
    - Cantidad/Peso.
    - Fecha de caducidad si es visible.
    - Proveedor si es un albarán.

    Devuelve los datos estructurados en español."""


def to_json(records: Sequence[Any]) -> str:
    """Serialises pydantic records the way they are shown to the model."""
    return json.dumps([r.model_dump(mode="json") for r in records], ensure_ascii=False)


def _text_part(text: str) -> Dict[str, Any]:
    return {"text": text}


def extract_text(data: Dict[str, Any]) -> str:
    """
    Joins the text parts of the first candidate. Thought summaries are skipped;
    a response without candidates yields an empty string.
    """
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if not p.get("thought"))


class GeminiClient:
    """
    Thin client for the Gemini `generateContent` REST endpoint.

    The HTTP call itself is blocking (requests); the async helpers push it to the
    thread pool so the event loop keeps serving other interactions meanwhile.
    """

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = MODEL_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate_content(
        self,
        contents: List[Dict[str, Any]],
        system_instruction: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> str:
        if not self.api_key:
            raise ModelServiceError("GEMINI_API_KEY not configured")

        payload: Dict[str, Any] = {"contents": contents}
        if system_instruction:
            payload["systemInstruction"] = {"parts": [_text_part(system_instruction)]}
        if thinking_budget:
            payload["generationConfig"] = {"thinkingConfig": {"thinkingBudget": thinking_budget}}

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        try:
            response = self.session.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"Gemini connection error: {e}")
            raise ModelServiceError("Unable to reach the model service") from e

        if response.status_code != 200:
            log.error(f"Gemini call failed. Status: {response.status_code}, Body: {response.text}")
            raise ModelServiceError(f"Model service answered {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            log.error("Gemini returned invalid JSON")
            raise ModelServiceError("Invalid response from model service") from e

        return extract_text(data)

    # --- Kitchen calls ---

    async def chat_with_inventory(self, request: ChatCompletionRequest) -> str:
        contents = [
            {"role": "user" if m.role == ChatRole.USER else "model", "parts": [_text_part(m.text)]}
            for m in request.history
        ]
        contents.append({"role": "user", "parts": [_text_part(request.message)]})
        return await run_in_threadpool(
            self.generate_content,
            contents,
            CHAT_SYSTEM_INSTRUCTION.format(inventory=to_json(request.inventory_snapshot)),
            CHAT_THINKING_BUDGET if request.deep_reasoning else None,
        )

    async def suggest_daily_orders(
        self,
        inventory: Sequence[InventoryItem],
        usage: Optional[Sequence[UsageHistory]] = None,
    ) -> str:
        prompt = SUGGESTION_PROMPT.format(inventory=to_json(inventory), usage=to_json(usage or []))
        return await run_in_threadpool(
            self.generate_content,
            [{"role": "user", "parts": [_text_part(prompt)]}],
            None,
            SUGGESTION_THINKING_BUDGET,
        )

    async def analyze_kitchen_image(self, image_base64: str, mime_type: str) -> str:
        contents = [{
            "role": "user",
            "parts": [
                {"inlineData": {"mimeType": mime_type, "data": image_base64}},
                _text_part(IMAGE_PROMPT),
            ],
        }]
        return await run_in_threadpool(self.generate_content, contents)
