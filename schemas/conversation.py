"""Conversation and message schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from memory.models import utcnow


class ConversationSchema(BaseModel):
    """Conversation session."""

    id: str = Field(..., description="Conversation ID")
    title: Optional[str] = None
    summary: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageBaseSchema(BaseModel):
    """Base message schema."""

    id: str = Field(..., min_length=1, description="Message ID")
    conversation_id: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1, description="'user', 'assistant' or 'system'")
    content: str = Field(..., description="Message content")
    response_type: Optional[str] = Field(
        default=None, description="Agent that produced the message ('instinct', 'logic', 'psyche')"
    )
    references_message_id: Optional[str] = None


class MessageCreateSchema(MessageBaseSchema):
    timestamp: datetime = Field(default_factory=utcnow)


class MessageSchema(MessageBaseSchema):
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
