"""
Theme Tracker - frequency and conversation membership of recurring topics.
"""

from typing import List, Optional

from sqlalchemy import desc

from core import get_logger
from memory.database import Database
from memory.matching import MatchStrategy, ExactMatch
from memory.models import RecurringTheme, utcnow
from memory.serialization import encode_list, decode_list
from schemas import RecurringThemeSchema

logger = get_logger(__name__)


def theme_to_schema(row: RecurringTheme) -> RecurringThemeSchema:
    return RecurringThemeSchema(
        id=row.id,
        theme=row.theme,
        frequency=row.frequency,
        last_mentioned=row.last_mentioned,
        related_conversations=decode_list(
            row.related_conversations, "recurring_themes.related_conversations"
        ),
    )


class ThemeTracker:
    """Counts how often a theme comes up and in which conversations."""

    def __init__(self, db: Database, matcher: Optional[MatchStrategy] = None):
        self.db = db
        self.matcher = matcher or ExactMatch()

    def _find_existing(self, session, theme: str) -> Optional[RecurringTheme]:
        if self.matcher.exact:
            return session.query(RecurringTheme).filter(RecurringTheme.theme == theme).first()
        return self.matcher.find(
            session.query(RecurringTheme).order_by(RecurringTheme.id).all(), theme, "theme"
        )

    def record(self, theme: str, conversation_id: str) -> RecurringThemeSchema:
        """
        Record one mention of ``theme`` in ``conversation_id``.

        Frequency counts every call; the conversation id is added to the
        related set only once.
        """
        with self.db.get_session() as session:
            existing = self._find_existing(session, theme)
            now = utcnow()

            if existing:
                conversations = decode_list(
                    existing.related_conversations, "recurring_themes.related_conversations"
                )
                if conversation_id not in conversations:
                    conversations.append(conversation_id)
                existing.frequency += 1
                existing.last_mentioned = now
                existing.related_conversations = encode_list(conversations)
                row = existing
                logger.debug("Reinforced theme", theme=row.theme, frequency=row.frequency)
            else:
                row = RecurringTheme(
                    theme=theme,
                    frequency=1,
                    last_mentioned=now,
                    related_conversations=encode_list([conversation_id]),
                )
                session.add(row)
                session.flush()
                logger.info("Added theme", theme=theme, conversation_id=conversation_id)

            return theme_to_schema(row)

    def get_all(self) -> List[RecurringThemeSchema]:
        with self.db.get_session() as session:
            rows = (
                session.query(RecurringTheme)
                .order_by(desc(RecurringTheme.frequency), RecurringTheme.id)
                .all()
            )
            return [theme_to_schema(row) for row in rows]

    def get_top(self, limit: int) -> List[RecurringThemeSchema]:
        """The ``limit`` most frequent themes."""
        with self.db.get_session() as session:
            rows = (
                session.query(RecurringTheme)
                .order_by(desc(RecurringTheme.frequency), RecurringTheme.id)
                .limit(limit)
                .all()
            )
            return [theme_to_schema(row) for row in rows]

    def count(self) -> int:
        with self.db.get_session() as session:
            return session.query(RecurringTheme).count()
