import logging
from fastapi import APIRouter, Depends, HTTPException, status
from app.api.deps import get_assistant
from app.schemas.assistant import (
    ChatRequest,
    ChatStateResponse,
    ImageAnalysisRequest,
    ImageAnalysisResponse,
    SuggestionResponse,
)
from app.schemas.response import SuccessResponse
from app.services.assistant_service import AssistantService

log = logging.getLogger("uvicorn")

router = APIRouter()


def chat_state(assistant: AssistantService) -> dict:
    return ChatStateResponse(
        messages=assistant.chat.messages,
        is_loading=assistant.chat.is_loading,
    ).model_dump(mode="json")


def suggestion_state(assistant: AssistantService) -> dict:
    return SuggestionResponse(
        suggestion=assistant.suggestion.text,
        is_loading=assistant.suggestion.is_loading,
    ).model_dump()


@router.get("/chat", response_model=SuccessResponse)
async def get_chat(assistant: AssistantService = Depends(get_assistant)):
    return SuccessResponse(data=chat_state(assistant))


@router.post("/chat", response_model=SuccessResponse)
async def send_chat_message(payload: ChatRequest, assistant: AssistantService = Depends(get_assistant)):
    """
    Sends one turn to the kitchen assistant together with the full inventory.
    A model failure still answers 200 with the fallback text as the reply.
    """
    if not payload.message.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message must not be empty.")
    await assistant.send_message(payload.message, deep_reasoning=payload.deep_reasoning)
    return SuccessResponse(data=chat_state(assistant))


@router.delete("/chat", response_model=SuccessResponse)
async def reset_chat(assistant: AssistantService = Depends(get_assistant)):
    """Starts a new conversation; replies still pending for the old one are discarded."""
    assistant.reset_chat()
    return SuccessResponse(data=chat_state(assistant))


@router.get("/suggestion", response_model=SuccessResponse)
async def get_suggestion(assistant: AssistantService = Depends(get_assistant)):
    return SuccessResponse(data=suggestion_state(assistant))


@router.post("/suggestion", response_model=SuccessResponse)
async def create_suggestion(assistant: AssistantService = Depends(get_assistant)):
    """Purchase order recommendation built from stock levels and recent consumption."""
    await assistant.suggest_orders()
    log.info("Daily order suggestion generated.")
    return SuccessResponse(data=suggestion_state(assistant))


@router.delete("/suggestion", response_model=SuccessResponse)
async def clear_suggestion(assistant: AssistantService = Depends(get_assistant)):
    assistant.suggestion.clear()
    return SuccessResponse(data=suggestion_state(assistant))


@router.post("/analyze-image", response_model=SuccessResponse)
async def analyze_image(payload: ImageAnalysisRequest, assistant: AssistantService = Depends(get_assistant)):
    """OCR-style reading of a receipt, delivery note or pantry photo. Informational only."""
    analysis = await assistant.analyze_image(payload.data, payload.mime_type)
    if analysis is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Conversation was reset during analysis.")
    return SuccessResponse(data=ImageAnalysisResponse(analysis=analysis).model_dump())
