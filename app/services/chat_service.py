# app/services/chat_service.py
import logging
from typing import Any

import httpx
from fastapi import HTTPException, status

from app.core.config import Settings
from app.schemas.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are the AI Assistant for Electro Sultani, a professional and helpful customer service representative.

## Company Information:
- **Company Name:** Electro Sultani (established 1969)
- **Location:** Dara Araian, Mujahid Rd, Rehmat Pura Dara Arain, Sialkot, 51310, Pakistan
- **Contact:** 0322 7858264
- **Email:** info@sultani.pk

## Products & Services:
- Solar panels (mono PERC, bifacial, N-Type) from Longi, Jinko, Canadian Solar, JA Solar, Trina Solar
- Hybrid, on-grid and off-grid inverters from Huawei, Growatt, Solis
- Lithium-ion and tubular batteries
- Complete solar systems from 1kW to megawatt scale
- Solar water pumps, LED lighting, professional installation

## Payment & Delivery:
- Cash on Delivery, Bank Transfer, JazzCash, Easypaisa
- Free delivery on orders above PKR 50,000 within eligible areas

## Rules:
1. Only answer questions about solar energy, our products, services, installation,
   pricing, warranties and energy savings.
2. For unrelated questions, politely explain that you specialize in solar energy
   solutions and offer to help with those instead.
3. Use Markdown: '-' bullet lists, **bold** key terms and numbers, ### headings for
   longer answers, blank lines between paragraphs.
4. For pricing, explain that prices depend on system capacity, brand and site, and
   suggest calling **0322 7858264** for a customized quote.
5. Be professional, courteous and business-focused.
""".strip()

FALLBACK_REPLY = "I apologize, I couldn't generate a response. Please try again."


class ChatService:
    """
    Proxy between the storefront chat widget and a hosted
    OpenAI-compatible chat-completion API.

    Responsibilities:
      - prepend the fixed system prompt
      - forward only the last CHAT_HISTORY_WINDOW history messages
      - map upstream failures to a generic 500
    """

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def build_messages(self, payload: ChatRequest) -> list[dict[str, str]]:
        window = self.settings.CHAT_HISTORY_WINDOW
        history = payload.conversation_history[-window:] if window > 0 else []
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            *({"role": m.role, "content": m.content} for m in history),
            {"role": "user", "content": payload.message},
        ]

    def reply(self, payload: ChatRequest) -> ChatResponse:
        if not self.settings.GROQ_API_KEY:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Chatbot service is not configured",
            )

        if not payload.message.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Message is required",
            )

        body: dict[str, Any] = {
            "model": self.settings.GROQ_MODEL,
            "messages": self.build_messages(payload),
            "temperature": 0.7,
            "max_tokens": 1024,
            "top_p": 0.9,
        }

        try:
            with httpx.Client(
                transport=self.transport,
                timeout=self.settings.CHAT_TIMEOUT_SECONDS,
            ) as client:
                response = client.post(
                    self.settings.GROQ_API_URL,
                    json=body,
                    headers={"Authorization": f"Bearer {self.settings.GROQ_API_KEY}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Chat upstream error %s: %s", exc.response.status_code, exc.response.text)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to get response from AI",
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Chat upstream request failed: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to get response from AI",
            ) from exc

        return ChatResponse(message=_first_choice_text(data) or FALLBACK_REPLY)


def _first_choice_text(data: Any) -> str | None:
    try:
        return data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
