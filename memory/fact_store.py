"""
Fact Store - upsert-merge of discrete user facts.

A fact is identified by (category, key). Re-observing a fact overwrites its
value, keeps the higher of the two confidences and bumps mention_count.
"""

from typing import List, Optional

from sqlalchemy import desc

from config.settings import settings
from core import get_logger, InvalidMemoryDataError
from memory.database import Database
from memory.models import UserFact
from schemas import FactSchema, FactCreateSchema

logger = get_logger(__name__)


class FactStore:
    """Persistent store of user facts."""

    def __init__(self, db: Database):
        self.db = db

    def upsert(self, fact: FactCreateSchema) -> FactSchema:
        """
        Insert a new fact or reinforce the existing one with the same identity.

        Args:
            fact: Incoming fact observation

        Returns:
            The stored fact after the merge

        Raises:
            InvalidMemoryDataError: If category or key is empty
            DatabaseException: If the database operation fails
        """
        if not fact.category or not fact.key:
            raise InvalidMemoryDataError("category/key", "fact identity must be non-empty")

        with self.db.get_session() as session:
            existing = (
                session.query(UserFact)
                .filter(UserFact.category == fact.category, UserFact.key == fact.key)
                .first()
            )

            if existing:
                existing.value = fact.value
                existing.confidence = max(existing.confidence, fact.confidence)
                existing.last_confirmed = fact.last_confirmed
                existing.mention_count += 1
                row = existing
                logger.info(
                    "Reinforced fact",
                    category=fact.category,
                    key=fact.key,
                    mention_count=row.mention_count,
                )
            else:
                row = UserFact(
                    category=fact.category,
                    key=fact.key,
                    value=fact.value,
                    confidence=fact.confidence,
                    source_type=fact.source_type,
                    source_conversation_id=fact.source_conversation_id,
                    first_mentioned=fact.first_mentioned,
                    last_confirmed=fact.last_confirmed,
                    mention_count=fact.mention_count,
                )
                session.add(row)
                session.flush()
                logger.info("Added fact", category=fact.category, key=fact.key)

            return FactSchema.model_validate(row)

    def get(self, category: str, key: str) -> Optional[FactSchema]:
        """Get a single fact by identity."""
        with self.db.get_session() as session:
            row = (
                session.query(UserFact)
                .filter(UserFact.category == category, UserFact.key == key)
                .first()
            )
            return FactSchema.model_validate(row) if row else None

    def get_all(self) -> List[FactSchema]:
        """All facts, strongest first."""
        with self.db.get_session() as session:
            rows = (
                session.query(UserFact)
                .order_by(desc(UserFact.confidence), desc(UserFact.mention_count))
                .all()
            )
            return [FactSchema.model_validate(row) for row in rows]

    def get_by_category(self, category: str) -> List[FactSchema]:
        """Facts in one category, ordered by confidence."""
        with self.db.get_session() as session:
            rows = (
                session.query(UserFact)
                .filter(UserFact.category == category)
                .order_by(desc(UserFact.confidence), desc(UserFact.mention_count))
                .all()
            )
            return [FactSchema.model_validate(row) for row in rows]

    def get_high_confidence(self, min_confidence: Optional[float] = None) -> List[FactSchema]:
        """Facts whose confidence is at least ``min_confidence`` (HIGH_CONFIDENCE_THRESHOLD by default)."""
        if min_confidence is None:
            min_confidence = settings.HIGH_CONFIDENCE_THRESHOLD
        with self.db.get_session() as session:
            rows = (
                session.query(UserFact)
                .filter(UserFact.confidence >= min_confidence)
                .order_by(desc(UserFact.confidence), desc(UserFact.mention_count))
                .all()
            )
            return [FactSchema.model_validate(row) for row in rows]

    def count(self) -> int:
        with self.db.get_session() as session:
            return session.query(UserFact).count()
