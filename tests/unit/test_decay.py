"""
Tests for the decay scheduler: floor, independent pruning, return value.
"""

import pytest

from memory.decay import DecayScheduler
from memory.pattern_store import PatternStore
from schemas import PatternObservationSchema


@pytest.fixture
def patterns(db):
    return PatternStore(db)


@pytest.fixture
def scheduler(db):
    return DecayScheduler(db)


def add(patterns, description, confidence, count=1):
    return patterns.observe(PatternObservationSchema(
        pattern_type="thinking_mode",
        description=description,
        confidence=confidence,
        observation_count=count,
    ))


class TestDecayFloor:

    def test_decay_stops_at_floor(self, patterns, scheduler):
        """0.15 - 0.1 floors at 0.1; a well-observed pattern survives at the floor."""
        add(patterns, "overthinks", 0.15, count=5)
        scheduler.decay(threshold=0.5, decay_amount=0.1)

        [stored] = patterns.get_all()
        assert stored.confidence == pytest.approx(0.1)

    def test_repeated_decay_never_goes_below_floor(self, patterns, scheduler):
        add(patterns, "overthinks", 0.4, count=3)
        for _ in range(10):
            scheduler.decay(threshold=0.5, decay_amount=0.2)
        assert patterns.get_all()[0].confidence == pytest.approx(0.1)

    def test_patterns_at_or_above_threshold_untouched(self, patterns, scheduler):
        add(patterns, "strong", 0.5)
        add(patterns, "weak", 0.45, count=3)
        affected = scheduler.decay(threshold=0.5, decay_amount=0.05)

        assert affected == 1
        by_desc = {p.description: p.confidence for p in patterns.get_all()}
        assert by_desc["strong"] == pytest.approx(0.5)
        assert by_desc["weak"] == pytest.approx(0.4)


class TestDecayPruning:

    def test_reinforced_pattern_survives_low_confidence(self, patterns, scheduler):
        add(patterns, "veteran", 0.1, count=5)
        scheduler.decay(threshold=0.5, decay_amount=0.1)
        assert [p.description for p in patterns.get_all()] == ["veteran"]

    def test_unreinforced_low_pattern_is_deleted(self, patterns, scheduler):
        add(patterns, "one-off", 0.1, count=1)
        scheduler.decay(threshold=0.5, decay_amount=0.1)
        assert patterns.get_all() == []

    def test_pruning_ignores_caller_threshold(self, patterns, scheduler):
        """A weak pattern is pruned even when the threshold excludes it from decay."""
        add(patterns, "one-off", 0.15, count=2)
        affected = scheduler.decay(threshold=0.0, decay_amount=0.1)
        assert affected == 0
        assert patterns.get_all() == []

    def test_return_counts_decayed_not_deleted(self, patterns, scheduler):
        add(patterns, "kept", 0.3, count=3)
        add(patterns, "dropped", 0.15, count=1)
        affected = scheduler.decay(threshold=0.5, decay_amount=0.1)

        assert affected == 2
        assert [p.description for p in patterns.get_all()] == ["kept"]

    @pytest.mark.parametrize("confidence,count,survives", [
        (0.19, 2, False),
        (0.19, 3, True),
        (0.2, 1, True),
        (0.1, 1, False),
    ])
    def test_prune_boundaries(self, patterns, scheduler, confidence, count, survives):
        """Decay is disabled here (threshold 0) so only the prune rule applies."""
        add(patterns, "p", confidence, count=count)
        scheduler.decay(threshold=0.0, decay_amount=0.0)
        assert (len(patterns.get_all()) == 1) is survives
