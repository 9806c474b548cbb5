import base64
import binascii
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from app.models.chat import ChatMessage


class ChatRequest(BaseModel):
    """Schema for one user turn in the assistant chat."""
    message: str = Field(..., description="Free-text question about the kitchen.")
    deep_reasoning: bool = Field(False, description="Give the model a larger thinking budget for this turn.")


class ImageAnalysisRequest(BaseModel):
    """An image (receipt, pantry or fridge photo) encoded as base64."""
    data: str = Field(..., min_length=1, description="Base64 encoded image bytes.")
    mime_type: str = Field(..., description="Media type, e.g. image/jpeg.")

    @field_validator("data")
    @classmethod
    def check_base64(cls, v: str) -> str:
        # Accept data URLs as produced by browsers: "data:image/png;base64,...."
        if v.startswith("data:") and "," in v:
            v = v.split(",", 1)[1]
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("data is not valid base64")
        return v

    @field_validator("mime_type")
    @classmethod
    def check_mime_type(cls, v: str) -> str:
        if not v.startswith("image/"):
            raise ValueError("mime_type must be an image media type")
        return v


class ChatStateResponse(BaseModel):
    messages: List[ChatMessage]
    is_loading: bool


class SuggestionResponse(BaseModel):
    suggestion: Optional[str]
    is_loading: bool


class ImageAnalysisResponse(BaseModel):
    analysis: str
