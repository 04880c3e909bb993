"""
SQLAlchemy models for the Intersect memory store.
Defines all tables for the user profile, conversation log and consolidated memories.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Index,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Float,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

DEFAULT_INSTINCT_WEIGHT = 0.20
DEFAULT_LOGIC_WEIGHT = 0.50
DEFAULT_PSYCHE_WEIGHT = 0.30


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite hands back on read."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserProfile(Base):
    """Singleton row holding credentials and the personality weight vector."""

    __tablename__ = "user_profile"

    id = Column(Integer, primary_key=True)
    api_key = Column(Text, nullable=True)
    anthropic_key = Column(Text, nullable=True)
    instinct_weight = Column(Float, default=DEFAULT_INSTINCT_WEIGHT, nullable=False)
    logic_weight = Column(Float, default=DEFAULT_LOGIC_WEIGHT, nullable=False)
    psyche_weight = Column(Float, default=DEFAULT_PSYCHE_WEIGHT, nullable=False)
    total_messages = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return (
            f"<UserProfile(instinct={self.instinct_weight}, logic={self.logic_weight}, "
            f"psyche={self.psyche_weight}, total_messages={self.total_messages})>"
        )


class Conversation(Base):
    """Conversation sessions."""

    __tablename__ = "conversations"

    id = Column(String(64), primary_key=True)
    title = Column(String(500), nullable=True)
    summary = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    messages = relationship("Message", back_populates="conversation")

    def __repr__(self):
        return f"<Conversation(id='{self.id}', title='{self.title}')>"


class Message(Base):
    """Messages with agent attribution."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_conversation_timestamp", "conversation_id", "timestamp"),
    )

    id = Column(String(64), primary_key=True)
    conversation_id = Column(String(64), ForeignKey("conversations.id"), nullable=False)
    role = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    response_type = Column(String(50), nullable=True)  # "instinct", "logic", "psyche", ...
    references_message_id = Column(String(64), nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")

    def __repr__(self):
        return f"<Message(conversation_id='{self.conversation_id}', role='{self.role}')>"


class UserContext(Base):
    """Legacy key/value context learned by agents."""

    __tablename__ = "user_context"

    id = Column(Integer, primary_key=True)
    key = Column(String(255), unique=True, nullable=False)
    value = Column(Text, nullable=False)
    confidence = Column(Float, default=0.5, nullable=False)
    source_agent = Column(String(50), nullable=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<UserContext(key='{self.key}', confidence={self.confidence})>"


class UserFact(Base):
    """Discrete statements about the user, identified by (category, key)."""

    __tablename__ = "user_facts"
    __table_args__ = (
        UniqueConstraint("category", "key", name="uq_user_facts_category_key"),
    )

    id = Column(Integer, primary_key=True)
    category = Column(String(100), nullable=False, index=True)  # "personal", "preferences", "work", "relationships", "values"
    key = Column(String(255), nullable=False)
    value = Column(Text, nullable=False)
    confidence = Column(Float, default=1.0, nullable=False)  # 1.0 for explicit, lower for inferred
    source_type = Column(String(20), nullable=False)  # "explicit" or "inferred"
    source_conversation_id = Column(String(64), nullable=True)
    first_mentioned = Column(DateTime, nullable=False)
    last_confirmed = Column(DateTime, nullable=False)
    mention_count = Column(Integer, default=1, nullable=False)

    def __repr__(self):
        return f"<UserFact({self.category}.{self.key}='{self.value}', confidence={self.confidence})>"


class UserPattern(Base):
    """Behavioral or personality observations reinforced across conversations."""

    __tablename__ = "user_patterns"
    __table_args__ = (
        Index("idx_user_patterns_type_description", "pattern_type", "description"),
    )

    id = Column(Integer, primary_key=True)
    pattern_type = Column(String(100), nullable=False)  # "communication_style", "emotional_tendency", "thinking_mode", ...
    description = Column(Text, nullable=False)
    confidence = Column(Float, default=0.5, nullable=False)
    evidence = Column(Text, nullable=False)  # JSON array of supporting observations
    first_observed = Column(DateTime, nullable=False)
    last_updated = Column(DateTime, nullable=False)
    observation_count = Column(Integer, default=1, nullable=False)

    def __repr__(self):
        return f"<UserPattern({self.pattern_type}: '{self.description}', confidence={self.confidence})>"


class ConversationSummaryRecord(Base):
    """Latest compact summary of a conversation."""

    __tablename__ = "conversation_summaries"

    id = Column(Integer, primary_key=True)
    conversation_id = Column(String(64), unique=True, nullable=False)
    summary = Column(Text, nullable=False)
    key_topics = Column(Text, nullable=False)  # JSON array
    emotional_tone = Column(String(100), nullable=True)
    user_state = Column(String(100), nullable=True)
    agents_involved = Column(Text, nullable=False)  # JSON array
    message_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<ConversationSummaryRecord(conversation_id='{self.conversation_id}')>"


class RecurringTheme(Base):
    """Cross-conversation recurring topics."""

    __tablename__ = "recurring_themes"

    id = Column(Integer, primary_key=True)
    theme = Column(String(255), unique=True, nullable=False)
    frequency = Column(Integer, default=1, nullable=False)
    last_mentioned = Column(DateTime, nullable=False)
    related_conversations = Column(Text, nullable=True)  # JSON array of conversation ids

    def __repr__(self):
        return f"<RecurringTheme(theme='{self.theme}', frequency={self.frequency})>"
