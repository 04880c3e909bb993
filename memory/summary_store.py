"""
Summary Store - one live compact summary per conversation.
"""

from typing import List, Optional

from sqlalchemy import desc

from core import get_logger
from memory.database import Database
from memory.models import ConversationSummaryRecord
from memory.serialization import encode_list, decode_list
from schemas import ConversationSummarySchema, ConversationSummaryCreateSchema

logger = get_logger(__name__)


def summary_to_schema(row: ConversationSummaryRecord) -> ConversationSummarySchema:
    return ConversationSummarySchema(
        id=row.id,
        conversation_id=row.conversation_id,
        summary=row.summary,
        key_topics=decode_list(row.key_topics, "conversation_summaries.key_topics"),
        emotional_tone=row.emotional_tone,
        user_state=row.user_state,
        agents_involved=decode_list(row.agents_involved, "conversation_summaries.agents_involved"),
        message_count=row.message_count,
        created_at=row.created_at,
    )


class SummaryStore:
    """Latest-wins storage of conversation summaries."""

    def __init__(self, db: Database):
        self.db = db

    def replace(self, summary: ConversationSummaryCreateSchema) -> ConversationSummarySchema:
        """Store ``summary``, discarding any previous summary of the same conversation."""
        with self.db.get_session() as session:
            row = (
                session.query(ConversationSummaryRecord)
                .filter(ConversationSummaryRecord.conversation_id == summary.conversation_id)
                .first()
            )
            if row is None:
                row = ConversationSummaryRecord(conversation_id=summary.conversation_id)
                session.add(row)

            row.summary = summary.summary
            row.key_topics = encode_list(summary.key_topics)
            row.emotional_tone = summary.emotional_tone
            row.user_state = summary.user_state
            row.agents_involved = encode_list(summary.agents_involved)
            row.message_count = summary.message_count
            row.created_at = summary.created_at
            session.flush()

            logger.info(
                "Saved conversation summary",
                conversation_id=summary.conversation_id,
                message_count=summary.message_count,
            )
            return summary_to_schema(row)

    def get(self, conversation_id: str) -> Optional[ConversationSummarySchema]:
        with self.db.get_session() as session:
            row = (
                session.query(ConversationSummaryRecord)
                .filter(ConversationSummaryRecord.conversation_id == conversation_id)
                .first()
            )
            return summary_to_schema(row) if row else None

    def recent(self, limit: int) -> List[ConversationSummarySchema]:
        """Most recent summaries first."""
        with self.db.get_session() as session:
            rows = (
                session.query(ConversationSummaryRecord)
                .order_by(desc(ConversationSummaryRecord.created_at), desc(ConversationSummaryRecord.id))
                .limit(limit)
                .all()
            )
            return [summary_to_schema(row) for row in rows]
