"""
Tests for latest-wins conversation summaries.
"""

from datetime import timedelta

import pytest

from memory.summary_store import SummaryStore
from schemas import ConversationSummaryCreateSchema


@pytest.fixture
def summaries(db):
    return SummaryStore(db)


def summary(conversation_id, text="talked about work", **kwargs):
    return ConversationSummaryCreateSchema(conversation_id=conversation_id, summary=text, **kwargs)


class TestSummaryReplace:

    def test_round_trip_native_lists(self, summaries):
        summaries.replace(summary(
            "c1",
            key_topics=["job search", "burnout"],
            agents_involved=["logic", "psyche"],
            emotional_tone="anxious",
            user_state="tired",
            message_count=12,
        ))

        stored = summaries.get("c1")
        assert stored.key_topics == ["job search", "burnout"]
        assert stored.agents_involved == ["logic", "psyche"]
        assert stored.emotional_tone == "anxious"
        assert stored.message_count == 12

    def test_replace_keeps_single_row(self, summaries):
        summaries.replace(summary("c1", "first", key_topics=["a"]))
        summaries.replace(summary("c1", "second"))

        stored = summaries.get("c1")
        assert stored.summary == "second"
        assert stored.key_topics == []
        assert len(summaries.recent(10)) == 1

    def test_missing_summary_is_none(self, summaries):
        assert summaries.get("nope") is None


class TestRecentSummaries:

    def test_most_recent_first_and_bounded(self, summaries, fixed_now):
        for i in range(4):
            summaries.replace(summary(f"c{i}", created_at=fixed_now + timedelta(hours=i)))

        recent = summaries.recent(3)
        assert [s.conversation_id for s in recent] == ["c3", "c2", "c1"]
