"""
Tests for the conversation/message log.
"""

from datetime import timedelta

import pytest

from core import DuplicateRecordError
from memory.conversation_log import ConversationLog
from memory.models import Conversation
from schemas import MessageCreateSchema


@pytest.fixture
def log(db):
    return ConversationLog(db)


def message(msg_id, conversation_id="c1", content="hi", **kwargs):
    return MessageCreateSchema(
        id=msg_id, conversation_id=conversation_id, role="user", content=content, **kwargs
    )


class TestConversations:

    def test_create_with_generated_id(self, log):
        conv = log.create_conversation()
        assert conv.id
        assert log.get_conversation(conv.id).id == conv.id

    def test_duplicate_id_is_an_error(self, log):
        log.create_conversation("c1")
        with pytest.raises(DuplicateRecordError):
            log.create_conversation("c1")

    def test_missing_conversation_is_none(self, log):
        assert log.get_conversation("nope") is None

    def test_update_title(self, log):
        log.create_conversation("c1")
        log.update_conversation_title("c1", "Career thoughts")
        assert log.get_conversation("c1").title == "Career thoughts"

    def test_recent_orders_by_activity(self, log):
        log.create_conversation("old")
        log.create_conversation("new")
        log.save_message(message("m1", conversation_id="old"))
        assert [c.id for c in log.get_recent_conversations(2)] == ["old", "new"]


class TestMessages:

    def test_save_message_touches_conversation(self, db, log, fixed_now):
        log.create_conversation("c1")
        with db.get_session() as session:
            session.get(Conversation, "c1").updated_at = fixed_now

        log.save_message(message("m1"))
        assert log.get_conversation("c1").updated_at > fixed_now

    def test_save_message_replaces_by_id(self, log):
        log.create_conversation("c1")
        log.save_message(message("m1", content="draft"))
        log.save_message(message("m1", content="final", response_type="logic"))

        [stored] = log.get_conversation_messages("c1")
        assert stored.content == "final"
        assert stored.response_type == "logic"

    def test_messages_in_chronological_order(self, log, fixed_now):
        log.create_conversation("c1")
        for i in (2, 0, 1):
            log.save_message(message(f"m{i}", timestamp=fixed_now + timedelta(minutes=i)))

        assert [m.id for m in log.get_conversation_messages("c1")] == ["m0", "m1", "m2"]
        assert [m.id for m in log.get_recent_messages("c1", limit=2)] == ["m1", "m2"]

    def test_clear_messages(self, log):
        log.create_conversation("c1")
        log.save_message(message("m1"))
        log.save_message(message("m2"))
        assert log.clear_conversation_messages("c1") == 2
        assert log.get_conversation_messages("c1") == []
