"""
Database initialization script.
Run this once to create all tables and the default user profile.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import configure_logging, get_logger
from memory.database import Database

logger = get_logger(__name__)


def main():
    """Initialize the database."""
    parser = argparse.ArgumentParser(description="Create the memory store tables")
    parser.add_argument("--url", help="Database URL (defaults to DATABASE_URL)")
    args = parser.parse_args()

    configure_logging()
    try:
        logger.info("Starting database initialization")
        db = Database(args.url).initialize()
        db.close()
        logger.info("Database initialization complete")

    except Exception as e:
        logger.error("Database initialization failed", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
