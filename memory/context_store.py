"""Legacy key/value user context, kept for compatibility."""

from typing import List, Optional

from sqlalchemy import desc

from core import get_logger
from memory.database import Database
from memory.models import UserContext, utcnow
from schemas import UserContextSchema

logger = get_logger(__name__)


class UserContextStore:
    def __init__(self, db: Database):
        self.db = db

    def save(
        self, key: str, value: str, confidence: float = 0.5, source_agent: Optional[str] = None
    ) -> UserContextSchema:
        """Insert or replace the entry for ``key``."""
        with self.db.get_session() as session:
            row = session.query(UserContext).filter(UserContext.key == key).first()
            if row is None:
                row = UserContext(key=key)
                session.add(row)
            row.value = value
            row.confidence = confidence
            row.source_agent = source_agent
            row.updated_at = utcnow()
            session.flush()
            return UserContextSchema.model_validate(row)

    def get_all(self) -> List[UserContextSchema]:
        with self.db.get_session() as session:
            rows = session.query(UserContext).order_by(desc(UserContext.confidence)).all()
            return [UserContextSchema.model_validate(row) for row in rows]

    def clear(self) -> None:
        with self.db.get_session() as session:
            session.query(UserContext).delete(synchronize_session=False)
        logger.info("Cleared user context")
