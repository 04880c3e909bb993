"""Behavioral pattern schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, ConfigDict

from memory.models import utcnow


class PatternBaseSchema(BaseModel):
    """Base pattern schema."""

    pattern_type: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="e.g. 'communication_style', 'emotional_tendency', 'thinking_mode'",
    )
    description: str = Field(..., min_length=1, description="The observed pattern")
    evidence: List[str] = Field(
        default_factory=list, description="Supporting observations, oldest first"
    )


class PatternObservationSchema(PatternBaseSchema):
    """An incoming pattern observation."""

    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    first_observed: datetime = Field(default_factory=utcnow)
    last_updated: datetime = Field(default_factory=utcnow)
    observation_count: int = Field(default=1, ge=1)


class PatternSchema(PatternBaseSchema):
    """Stored pattern."""

    id: int
    confidence: float
    first_observed: datetime
    last_updated: datetime
    observation_count: int

    model_config = ConfigDict(from_attributes=True)
