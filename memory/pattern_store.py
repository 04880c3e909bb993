"""
Pattern Store - deduplication and reinforcement of behavioral observations.
"""

from typing import List, Optional

from sqlalchemy import desc

from core import get_logger
from memory.database import Database
from memory.matching import MatchStrategy, ExactMatch
from memory.models import UserPattern, utcnow
from memory.serialization import encode_list, decode_list
from schemas import PatternSchema, PatternObservationSchema

logger = get_logger(__name__)

# Fixed confidence gain per matching re-observation
REINFORCEMENT_STEP = 0.1
MAX_CONFIDENCE = 1.0


def pattern_to_schema(row: UserPattern) -> PatternSchema:
    return PatternSchema(
        id=row.id,
        pattern_type=row.pattern_type,
        description=row.description,
        confidence=row.confidence,
        evidence=decode_list(row.evidence, "user_patterns.evidence"),
        first_observed=row.first_observed,
        last_updated=row.last_updated,
        observation_count=row.observation_count,
    )


class PatternStore:
    """
    Persistent store of user patterns.

    Identity is (pattern_type, description) under the configured match
    strategy; literal equality by default.
    """

    def __init__(self, db: Database, matcher: Optional[MatchStrategy] = None):
        self.db = db
        self.matcher = matcher or ExactMatch()

    def _find_existing(self, session, pattern: PatternObservationSchema) -> Optional[UserPattern]:
        query = session.query(UserPattern).filter(UserPattern.pattern_type == pattern.pattern_type)
        if self.matcher.exact:
            return query.filter(UserPattern.description == pattern.description).first()
        return self.matcher.find(query.order_by(UserPattern.id).all(), pattern.description, "description")

    def observe(self, pattern: PatternObservationSchema) -> PatternSchema:
        """
        Record a pattern observation.

        On a match the stored confidence rises by a fixed step (capped at 1.0),
        observation_count increments and the evidence list is replaced by the
        incoming one. Otherwise the observation is inserted as given.

        Raises:
            DatabaseException: If the database operation fails
        """
        with self.db.get_session() as session:
            existing = self._find_existing(session, pattern)

            if existing:
                existing.confidence = min(MAX_CONFIDENCE, existing.confidence + REINFORCEMENT_STEP)
                existing.observation_count += 1
                existing.last_updated = utcnow()
                existing.evidence = encode_list(pattern.evidence)
                row = existing
                logger.info(
                    "Reinforced pattern",
                    pattern_type=pattern.pattern_type,
                    confidence=row.confidence,
                    observation_count=row.observation_count,
                )
            else:
                row = UserPattern(
                    pattern_type=pattern.pattern_type,
                    description=pattern.description,
                    confidence=pattern.confidence,
                    evidence=encode_list(pattern.evidence),
                    first_observed=pattern.first_observed,
                    last_updated=pattern.last_updated,
                    observation_count=pattern.observation_count,
                )
                session.add(row)
                session.flush()
                logger.info("Added pattern", pattern_type=pattern.pattern_type)

            return pattern_to_schema(row)

    def get_all(self) -> List[PatternSchema]:
        """All patterns, strongest first."""
        with self.db.get_session() as session:
            rows = (
                session.query(UserPattern)
                .order_by(desc(UserPattern.confidence), desc(UserPattern.observation_count))
                .all()
            )
            return [pattern_to_schema(row) for row in rows]

    def get_by_type(self, pattern_type: str) -> List[PatternSchema]:
        with self.db.get_session() as session:
            rows = (
                session.query(UserPattern)
                .filter(UserPattern.pattern_type == pattern_type)
                .order_by(desc(UserPattern.confidence), desc(UserPattern.observation_count))
                .all()
            )
            return [pattern_to_schema(row) for row in rows]

    def count(self) -> int:
        with self.db.get_session() as session:
            return session.query(UserPattern).count()
