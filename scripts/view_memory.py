#!/usr/bin/env python3
"""
Memory viewer and maintenance tool.

Usage:
    python scripts/view_memory.py
    python scripts/view_memory.py --limit 20
    python scripts/view_memory.py --decay
    python scripts/view_memory.py --reset --yes

Shows: weights, facts, patterns, themes and recent conversation summaries.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from core import configure_logging
from memory.memory_manager import create_memory_manager


def section(title):
    """Print a section header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def show(manager, limit):
    weights = manager.weights.get()
    section("WEIGHTS")
    print(f"  instinct={weights.instinct:.2f}  logic={weights.logic:.2f}  psyche={weights.psyche:.2f}")
    print(f"  total messages: {weights.total_messages}")

    stats = manager.get_memory_stats(limit)

    section(f"FACTS ({stats.fact_count})")
    for fact in stats.top_facts:
        print(f"  [{fact.category}] {fact.key}: {fact.value}  "
              f"(conf {fact.confidence:.2f}, x{fact.mention_count}, {fact.source_type})")

    section(f"PATTERNS ({stats.pattern_count})")
    for pattern in stats.top_patterns:
        print(f"  [{pattern.pattern_type}] {pattern.description}  "
              f"(conf {pattern.confidence:.2f}, x{pattern.observation_count})")

    section(f"THEMES ({stats.theme_count})")
    for theme in manager.themes.get_top(limit):
        print(f"  {theme.theme}  x{theme.frequency}  in {len(theme.related_conversations)} conversations")

    section("RECENT SUMMARIES")
    for summary in manager.summaries.recent(settings.COMPACT_SUMMARY_LIMIT):
        topics = ", ".join(summary.key_topics) or "-"
        print(f"  {summary.created_at:%Y-%m-%d %H:%M}  {summary.conversation_id}: {summary.summary}")
        print(f"      topics: {topics}")


def main():
    parser = argparse.ArgumentParser(description="Inspect or maintain the memory store")
    parser.add_argument("--url", help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--limit", type=int, default=10, help="Entries per section")
    parser.add_argument("--decay", action="store_true", help="Run one decay pass first")
    parser.add_argument("--reset", action="store_true", help="Wipe all memory data")
    parser.add_argument("--yes", action="store_true", help="Confirm --reset")
    args = parser.parse_args()

    configure_logging()
    manager = create_memory_manager(args.url)
    try:
        if args.reset:
            if not args.yes:
                print("Refusing to reset without --yes")
                sys.exit(1)
            manager.reset_all_data()
            print("All memory data reset.")
            return

        if args.decay:
            decayed = manager.run_decay()
            print(f"Decayed {decayed} patterns.")

        show(manager, args.limit)
    finally:
        manager.db.close()


if __name__ == "__main__":
    main()
