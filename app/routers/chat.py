"""Chat widget endpoint."""
from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.schemas.chat import ChatRequest, ChatResponse
from app.services.chat import complete_chat

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
def chat(data: ChatRequest, settings: Settings = Depends(get_settings)):
    return ChatResponse(reply=complete_chat(settings, data.message, data.history))
