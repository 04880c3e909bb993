"""Recurring theme schema."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, ConfigDict


class RecurringThemeSchema(BaseModel):
    """Stored recurring theme."""

    id: int
    theme: str
    frequency: int = Field(..., description="Number of times the theme was recorded")
    last_mentioned: datetime
    related_conversations: List[str] = Field(
        default_factory=list, description="Distinct conversations mentioning the theme"
    )

    model_config = ConfigDict(from_attributes=True)
