"""
Conversation/Message Log - plain create/append/read of conversations.
"""

import uuid
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError

from core import get_logger, DuplicateRecordError
from memory.database import Database
from memory.models import Conversation, Message, utcnow
from schemas import ConversationSchema, MessageSchema, MessageCreateSchema

logger = get_logger(__name__)


class ConversationLog:
    """CRUD over conversations and their messages."""

    def __init__(self, db: Database):
        self.db = db

    # ==================== Conversations ====================

    def create_conversation(self, conversation_id: Optional[str] = None) -> ConversationSchema:
        """
        Create a new conversation.

        Args:
            conversation_id: Explicit id, a uuid4 is generated when omitted

        Raises:
            DuplicateRecordError: If a conversation with this id already exists
        """
        conversation_id = conversation_id or str(uuid.uuid4())
        with self.db.get_session() as session:
            now = utcnow()
            conv = Conversation(id=conversation_id, created_at=now, updated_at=now)
            session.add(conv)
            try:
                session.flush()
            except IntegrityError:
                logger.warning("Duplicate conversation", conversation_id=conversation_id)
                raise DuplicateRecordError("Conversation", "id", conversation_id)
            logger.info("Created conversation", conversation_id=conversation_id)
            return ConversationSchema.model_validate(conv)

    def get_conversation(self, conversation_id: str) -> Optional[ConversationSchema]:
        with self.db.get_session() as session:
            conv = session.get(Conversation, conversation_id)
            return ConversationSchema.model_validate(conv) if conv else None

    def get_recent_conversations(self, limit: int = 10) -> List[ConversationSchema]:
        """Most recently active conversations first."""
        with self.db.get_session() as session:
            rows = (
                session.query(Conversation)
                .order_by(desc(Conversation.updated_at))
                .limit(limit)
                .all()
            )
            return [ConversationSchema.model_validate(row) for row in rows]

    def update_conversation_title(self, conversation_id: str, title: str) -> None:
        with self.db.get_session() as session:
            conv = session.get(Conversation, conversation_id)
            if conv:
                conv.title = title
                conv.updated_at = utcnow()

    # ==================== Messages ====================

    def save_message(self, message: MessageCreateSchema) -> MessageSchema:
        """
        Insert or replace a message and touch its conversation's updated_at.

        Both writes share one transaction, so a failure leaves neither applied.
        """
        with self.db.get_session() as session:
            row = session.get(Message, message.id)
            if row is None:
                row = Message(id=message.id)
                session.add(row)
            row.conversation_id = message.conversation_id
            row.role = message.role
            row.content = message.content
            row.response_type = message.response_type
            row.references_message_id = message.references_message_id
            row.timestamp = message.timestamp
            session.flush()

            conv = session.get(Conversation, message.conversation_id)
            if conv:
                conv.updated_at = utcnow()

            logger.debug(
                "Saved message", conversation_id=message.conversation_id, role=message.role
            )
            return MessageSchema.model_validate(row)

    def get_conversation_messages(self, conversation_id: str) -> List[MessageSchema]:
        """All messages in chronological order."""
        with self.db.get_session() as session:
            rows = (
                session.query(Message)
                .filter(Message.conversation_id == conversation_id)
                .order_by(Message.timestamp)
                .all()
            )
            return [MessageSchema.model_validate(row) for row in rows]

    def get_recent_messages(self, conversation_id: str, limit: int = 10) -> List[MessageSchema]:
        """The last ``limit`` messages, returned in chronological order."""
        with self.db.get_session() as session:
            rows = (
                session.query(Message)
                .filter(Message.conversation_id == conversation_id)
                .order_by(desc(Message.timestamp))
                .limit(limit)
                .all()
            )
            return [MessageSchema.model_validate(row) for row in reversed(rows)]

    def clear_conversation_messages(self, conversation_id: str) -> int:
        with self.db.get_session() as session:
            deleted = (
                session.query(Message)
                .filter(Message.conversation_id == conversation_id)
                .delete(synchronize_session=False)
            )
            logger.info("Cleared messages", conversation_id=conversation_id, deleted=deleted)
            return deleted
