import uuid
from typing import Any, Optional
from pydantic import BaseModel, Field


def new_request_id() -> str:
    """Unique request ID for tracing a response back to the server log."""
    return uuid.uuid4().hex


class SuccessResponse(BaseModel):
    """Envelope for every successful API answer."""
    success: bool = True
    request_id: str = Field(default_factory=new_request_id)
    data: Optional[Any] = None


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Envelope produced by the exception handlers."""
    success: bool = False
    error: ErrorDetail
    request_id: str = Field(default_factory=new_request_id)
