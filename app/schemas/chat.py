"""Chat schemas: the message log, chat proxy requests and voice replies."""

from __future__ import annotations

from pydantic import Field

from models.message import MessageRole

from .base import BaseModelSchema, BaseSchema


class MessageCreate(BaseSchema):
    """Schema for appending a message to the log."""

    role: MessageRole
    content: str = Field(..., min_length=1)


class MessageResponse(BaseModelSchema):
    """Schema for message response."""

    role: MessageRole
    content: str


class ChatRequest(BaseSchema):
    """Schema for chat request."""

    content: str = Field(..., min_length=1, max_length=20000, description="User message")
    stream: bool = Field(default=False, description="Stream the reply as server-sent events")


class ChatResponse(BaseSchema):
    """Schema for a completed chat exchange."""

    user_message: MessageResponse
    assistant_message: MessageResponse


class VoiceResponse(BaseSchema):
    """Transcript, gateway reply and synthesised audio (base64 mp3)."""

    transcript: str
    response: str
    audio: str | None = None


class DebugLogEntry(BaseSchema):
    """A line sent by the UI to the debug log."""

    msg: str = Field(..., min_length=1, max_length=10000)
