"""Conversation summary schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from memory.models import utcnow


class ConversationSummaryBaseSchema(BaseModel):
    """Base summary schema."""

    conversation_id: str = Field(..., min_length=1)
    summary: str = Field(..., description="Compact free-text summary")
    key_topics: List[str] = Field(default_factory=list)
    emotional_tone: Optional[str] = None
    user_state: Optional[str] = None
    agents_involved: List[str] = Field(default_factory=list)
    message_count: int = Field(default=0, ge=0, description="Messages covered by the summary")


class ConversationSummaryCreateSchema(ConversationSummaryBaseSchema):
    created_at: datetime = Field(default_factory=utcnow)


class ConversationSummarySchema(ConversationSummaryBaseSchema):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
