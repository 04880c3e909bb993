"""Personality weight vector schema."""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict


class WeightVectorSchema(BaseModel):
    """Three-way response style blend plus the running message counter."""

    instinct: float = Field(..., description="Instinct weight")
    logic: float = Field(..., description="Logic weight")
    psyche: float = Field(..., description="Psyche weight")
    total_messages: int = Field(default=0, description="Messages processed so far")
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.instinct, self.logic, self.psyche)
