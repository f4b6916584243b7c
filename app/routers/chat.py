# app/routers/chat.py
from fastapi import APIRouter, Depends

from app.dependencies import get_chat_service
from app.schemas.chat import ChatRequest, ChatResponse
from app.services.chat_service import ChatService

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post("", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """
    Support chatbot.

    Forwards the message plus the most recent history to the hosted
    model with the store's fixed system prompt.
    """
    return service.reply(payload)
