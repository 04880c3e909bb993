"""
Memory Manager - Unified interface for all memory operations.
Composes the consolidation components over one explicitly owned Database handle.
"""

from typing import Optional


from config.settings import settings
from core import get_logger
from memory.context_store import UserContextStore
from memory.conversation_log import ConversationLog
from memory.database import Database
from memory.decay import DecayScheduler
from memory.fact_store import FactStore
from memory.matching import MatchStrategy, build_match_strategy
from memory.models import (
    Message,
    Conversation,
    UserContext,
    UserFact,
    UserPattern,
    ConversationSummaryRecord,
    RecurringTheme,
)
from memory.pattern_store import PatternStore
from memory.summary_store import SummaryStore
from memory.theme_tracker import ThemeTracker
from memory.weights import WeightVectorStore, WeightPolicy, reset_profile
from schemas import (
    ConsolidationBatchSchema,
    ConsolidationResultSchema,
    MemoryStatsSchema,
)

logger = get_logger(__name__)

# Tables wiped by reset_all_data(), children before parents
_RESET_MODELS = (
    Message,
    Conversation,
    UserContext,
    UserFact,
    UserPattern,
    ConversationSummaryRecord,
    RecurringTheme,
)


class MemoryManager:
    """
    Unified memory interface for the conversational assistant.

    Every component is a sibling over the same Database handle; none of them
    calls another.
    """

    def __init__(
        self,
        db: Database,
        pattern_matcher: Optional[MatchStrategy] = None,
        theme_matcher: Optional[MatchStrategy] = None,
        weight_policy: WeightPolicy = WeightPolicy.PASSTHROUGH,
    ):
        self.db = db
        self.facts = FactStore(db)
        self.patterns = PatternStore(db, pattern_matcher)
        self.decay = DecayScheduler(db)
        self.themes = ThemeTracker(db, theme_matcher)
        self.summaries = SummaryStore(db)
        self.weights = WeightVectorStore(db, weight_policy)
        self.conversations = ConversationLog(db)
        self.user_context = UserContextStore(db)

    # ==================== Consolidation ====================

    def consolidate(self, batch: ConsolidationBatchSchema) -> ConsolidationResultSchema:
        """
        Merge a batch of upstream candidates into the stores.

        Each candidate is merged in its own transaction; a failure stops the
        batch and propagates, leaving earlier candidates applied.
        """
        result = ConsolidationResultSchema()

        for fact in batch.facts:
            if fact.source_conversation_id is None:
                fact = fact.model_copy(update={"source_conversation_id": batch.conversation_id})
            self.facts.upsert(fact)
            result.facts += 1

        for pattern in batch.patterns:
            self.patterns.observe(pattern)
            result.patterns += 1

        for theme in batch.themes:
            self.themes.record(theme, batch.conversation_id)
            result.themes += 1

        if batch.summary is not None:
            self.summaries.replace(batch.summary)
            result.summary_saved = True

        logger.info(
            "Consolidated batch",
            conversation_id=batch.conversation_id,
            facts=result.facts,
            patterns=result.patterns,
            themes=result.themes,
            summary_saved=result.summary_saved,
        )
        return result

    def run_decay(
        self, threshold: Optional[float] = None, decay_amount: Optional[float] = None
    ) -> int:
        """Decay weak patterns using the configured defaults where not given."""
        return self.decay.decay(
            settings.DECAY_THRESHOLD if threshold is None else threshold,
            settings.DECAY_AMOUNT if decay_amount is None else decay_amount,
        )

    # ==================== Overview ====================

    def get_memory_stats(self, limit: Optional[int] = None) -> MemoryStatsSchema:
        """Counts plus the strongest facts, patterns and themes."""
        if limit is None:
            limit = settings.TOP_THEMES_LIMIT
        return MemoryStatsSchema(
            fact_count=self.facts.count(),
            pattern_count=self.patterns.count(),
            theme_count=self.themes.count(),
            top_facts=self.facts.get_all()[:limit],
            top_patterns=self.patterns.get_all()[:limit],
            top_themes=[t.theme for t in self.themes.get_top(limit)],
        )

    # ==================== Reset ====================

    def reset_all_data(self) -> None:
        """
        Wipe every conversation and memory, clear the stored API keys and
        restore the default weights. Irreversible; runs as one transaction.
        """
        with self.db.get_session() as session:
            for model in _RESET_MODELS:
                session.query(model).delete(synchronize_session=False)
            profile = WeightVectorStore._profile(session)
            reset_profile(profile, clear_credentials=True)

        logger.warning("All memory data reset")


def create_memory_manager(database_url: Optional[str] = None) -> MemoryManager:
    """Build and initialize a MemoryManager from settings."""
    db = Database(database_url).initialize()
    return MemoryManager(
        db,
        pattern_matcher=build_match_strategy(settings.PATTERN_MATCHING, settings.SIMILARITY_CUTOFF),
        theme_matcher=build_match_strategy(settings.THEME_MATCHING, settings.SIMILARITY_CUTOFF),
        weight_policy=WeightPolicy(settings.WEIGHT_POLICY),
    )
