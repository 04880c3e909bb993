"""Legacy user context, consolidation batches and memory statistics."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from schemas.fact import FactCreateSchema, FactSchema
from schemas.pattern import PatternObservationSchema, PatternSchema
from schemas.summary import ConversationSummaryCreateSchema


class UserContextSchema(BaseModel):
    """Legacy key/value context entry."""

    id: int
    key: str
    value: str
    confidence: float
    source_agent: Optional[str] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConsolidationBatchSchema(BaseModel):
    """Structured candidates extracted upstream from one conversation."""

    conversation_id: str = Field(..., min_length=1)
    facts: List[FactCreateSchema] = Field(default_factory=list)
    patterns: List[PatternObservationSchema] = Field(default_factory=list)
    themes: List[str] = Field(default_factory=list)
    summary: Optional[ConversationSummaryCreateSchema] = None


class ConsolidationResultSchema(BaseModel):
    """Counts of what a consolidation pass merged."""

    facts: int = 0
    patterns: int = 0
    themes: int = 0
    summary_saved: bool = False


class MemoryStatsSchema(BaseModel):
    """Overview of what the store currently believes about the user."""

    fact_count: int
    pattern_count: int
    theme_count: int
    top_facts: List[FactSchema] = Field(default_factory=list)
    top_patterns: List[PatternSchema] = Field(default_factory=list)
    top_themes: List[str] = Field(default_factory=list)

    def to_prompt_context(self) -> str:
        """
        Convert stats to a formatted string for an LLM prompt.

        Returns:
            Formatted context string
        """
        sections = []

        if self.top_facts:
            sections.append("## Known Facts")
            for fact in self.top_facts:
                sections.append(
                    f"- {fact.category.replace('_', ' ').title()} / {fact.key}: {fact.value} "
                    f"(confidence {fact.confidence:.2f})"
                )

        if self.top_patterns:
            sections.append("\n## Observed Patterns")
            for pattern in self.top_patterns:
                sections.append(f"- [{pattern.pattern_type}] {pattern.description}")

        if self.top_themes:
            sections.append("\n## Recurring Themes")
            sections.append(", ".join(self.top_themes))

        return "\n".join(sections)
