"""
Pydantic schemas for type-safe data transfer.
"""

from schemas.fact import FactSchema, FactCreateSchema
from schemas.pattern import PatternSchema, PatternObservationSchema
from schemas.summary import ConversationSummarySchema, ConversationSummaryCreateSchema
from schemas.theme import RecurringThemeSchema
from schemas.profile import WeightVectorSchema
from schemas.conversation import ConversationSchema, MessageSchema, MessageCreateSchema
from schemas.context import (
    UserContextSchema,
    ConsolidationBatchSchema,
    ConsolidationResultSchema,
    MemoryStatsSchema,
)

__all__ = [
    "FactSchema",
    "FactCreateSchema",
    "PatternSchema",
    "PatternObservationSchema",
    "ConversationSummarySchema",
    "ConversationSummaryCreateSchema",
    "RecurringThemeSchema",
    "WeightVectorSchema",
    "ConversationSchema",
    "MessageSchema",
    "MessageCreateSchema",
    "UserContextSchema",
    "ConsolidationBatchSchema",
    "ConsolidationResultSchema",
    "MemoryStatsSchema",
]
