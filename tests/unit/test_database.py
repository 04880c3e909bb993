"""
Tests for the Database handle: lifecycle, seeding and transactional sessions.
"""

import threading

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from core import DatabaseException, StoreNotInitializedError
from memory.context_store import UserContextStore
from memory.conversation_log import ConversationLog
from memory.database import Database
from memory.fact_store import FactStore
from memory.models import UserProfile, UserFact, utcnow
from memory.weights import WeightVectorStore


class TestLifecycle:

    def test_initialize_seeds_single_profile(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'seed.db'}"
        Database(url).initialize().close()
        db = Database(url).initialize()
        try:
            with db.get_session() as session:
                assert session.query(UserProfile).count() == 1
        finally:
            db.close()

    def test_context_manager(self, tmp_path):
        with Database(f"sqlite:///{tmp_path / 'cm.db'}") as db:
            assert db.is_initialized
        assert not db.is_initialized

    def test_session_before_initialize(self):
        with pytest.raises(StoreNotInitializedError):
            with Database("sqlite://").get_session():
                pass


class TestSessions:

    def test_failure_rolls_back_whole_block(self, db):
        now = utcnow()
        with pytest.raises(RuntimeError):
            with db.get_session() as session:
                session.add(UserFact(
                    category="work", key="role", value="x", source_type="explicit",
                    first_mentioned=now, last_confirmed=now,
                ))
                session.flush()
                raise RuntimeError("boom")

        with db.get_session() as session:
            assert session.query(UserFact).count() == 0

    def test_sessions_are_serialized(self, db):
        """A second thread cannot open a session while one is held."""
        entered = threading.Event()

        def worker():
            with db.get_session():
                entered.set()

        with db.get_session():
            thread = threading.Thread(target=worker)
            thread.start()
            assert not entered.wait(timeout=0.2)

        thread.join(timeout=5)
        assert entered.is_set()


class TestErrorTranslation:
    """SQLAlchemy failures surface as DatabaseException on every path."""

    def execute(self, db, statement):
        with db.get_session() as session:
            session.execute(text(statement))

    def test_read_failure_is_wrapped(self, db):
        self.execute(db, "DROP TABLE user_facts")
        with pytest.raises(DatabaseException) as exc_info:
            FactStore(db).get_all()
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_write_failure_is_wrapped(self, db):
        self.execute(db, "DROP TABLE user_context")
        with pytest.raises(DatabaseException):
            UserContextStore(db).save("k", "v")

    def test_weight_reset_failure_is_wrapped(self, db):
        self.execute(db, "ALTER TABLE user_profile RENAME TO user_profile_old")
        with pytest.raises(DatabaseException):
            WeightVectorStore(db).reset()

    def test_conversation_reads_are_wrapped(self, db):
        self.execute(db, "DROP TABLE messages")
        log = ConversationLog(db)
        with pytest.raises(DatabaseException):
            log.get_recent_messages("c1")
        with pytest.raises(DatabaseException):
            log.clear_conversation_messages("c1")
