from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


class ChatMessage(BaseModel):
    """
    One earlier turn of the conversation, as the widget keeps it.
    The system prompt is never accepted from clients.
    """

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """
    Payload sent by the support chat widget.

    The widget posts camelCase ("conversationHistory"); snake_case is
    accepted too.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    message: str = ""
    conversation_history: list[ChatMessage] = Field(default_factory=list)


class ChatResponse(SQLModel):
    message: str
    success: bool = True
