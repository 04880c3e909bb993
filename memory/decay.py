"""
Decay Scheduler - erosion and pruning of weakly reinforced patterns.

Nothing here runs on a timer; callers invoke decay() themselves, typically
when a session starts.
"""

from core import get_logger
from memory.database import Database
from memory.models import UserPattern

logger = get_logger(__name__)

# Decay never takes a pattern below this confidence
CONFIDENCE_FLOOR = 0.1
# Patterns below PRUNE_CONFIDENCE with fewer than PRUNE_MIN_OBSERVATIONS are deleted
PRUNE_CONFIDENCE = 0.2
PRUNE_MIN_OBSERVATIONS = 3


class DecayScheduler:
    """Applies confidence decay to the pattern store."""

    def __init__(self, db: Database):
        self.db = db

    def decay(self, threshold: float, decay_amount: float) -> int:
        """
        Decay weak patterns, then prune stale ones.

        1. Every pattern with confidence < threshold loses ``decay_amount``,
           floored at 0.1.
        2. Every pattern with confidence < 0.2 and observation_count < 3 is
           deleted, whatever ``threshold`` was.

        Both phases run in one transaction.

        Args:
            threshold: Patterns strictly below this confidence are decayed
            decay_amount: Confidence removed per pass

        Returns:
            Number of patterns decayed in phase 1 (pruned rows are not counted)
        """
        with self.db.get_session() as session:
            weak = session.query(UserPattern).filter(UserPattern.confidence < threshold).all()
            for pattern in weak:
                pattern.confidence = max(CONFIDENCE_FLOOR, pattern.confidence - decay_amount)
            session.flush()

            pruned = (
                session.query(UserPattern)
                .filter(
                    UserPattern.confidence < PRUNE_CONFIDENCE,
                    UserPattern.observation_count < PRUNE_MIN_OBSERVATIONS,
                )
                .delete(synchronize_session=False)
            )

            logger.info(
                "Decayed patterns",
                threshold=threshold,
                decay_amount=decay_amount,
                decayed=len(weak),
                pruned=pruned,
            )
            return len(weak)
