"""User fact schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from memory.models import utcnow


class FactBaseSchema(BaseModel):
    """Base fact schema."""

    category: str = Field(
        ...,
        max_length=100,
        description="Fact category (e.g., 'personal', 'preferences', 'work', 'relationships', 'values')",
    )
    key: str = Field(..., max_length=255, description="Fact key (e.g., 'role', 'favorite_food')")
    value: str = Field(..., description="Fact value")
    source_type: Literal["explicit", "inferred"] = Field(
        default="explicit", description="Whether the user stated it or it was inferred"
    )
    source_conversation_id: Optional[str] = Field(
        default=None, description="Conversation the fact was learned in (lookup key only)"
    )

    @field_validator("category", "key")
    @classmethod
    def validate_identity(cls, v: str) -> str:
        """Strip whitespace and require a non-empty identity."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class FactCreateSchema(FactBaseSchema):
    """An incoming fact observation."""

    confidence: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Confidence score (0.0 to 1.0)"
    )
    first_mentioned: datetime = Field(default_factory=utcnow)
    last_confirmed: datetime = Field(default_factory=utcnow)
    mention_count: int = Field(default=1, ge=1)


class FactSchema(FactBaseSchema):
    """Stored fact."""

    id: int = Field(..., description="Fact ID")
    confidence: float = Field(..., description="Current confidence")
    first_mentioned: datetime = Field(..., description="When this was first observed")
    last_confirmed: datetime = Field(..., description="Last reinforcement timestamp")
    mention_count: int = Field(..., description="Number of times observed")

    model_config = ConfigDict(from_attributes=True)
