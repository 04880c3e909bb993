"""
Shared pytest fixtures for memory engine tests.
"""

import pytest
from datetime import datetime

from memory.database import Database
from memory.memory_manager import MemoryManager


# --- Store fixtures ---

@pytest.fixture
def db(tmp_path):
    """A fresh file-backed SQLite store per test."""
    database = Database(f"sqlite:///{tmp_path / 'memory.db'}").initialize()
    yield database
    database.close()


@pytest.fixture
def manager(db):
    """MemoryManager over the test store with default policies."""
    return MemoryManager(db)


# --- Time fixtures ---

@pytest.fixture
def fixed_now():
    """A fixed naive UTC datetime for deterministic timestamps."""
    return datetime(2020, 2, 5, 14, 30, 0)

