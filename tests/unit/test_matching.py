"""
Tests for identity matching strategies and list serialization.
"""

import pytest

from core import MalformedMemoryDataError
from memory.matching import (
    ExactMatch,
    NormalizedMatch,
    SimilarityMatch,
    build_match_strategy,
    normalize_text,
)
from memory.serialization import decode_list, encode_list


class TestNormalizeText:

    @pytest.mark.parametrize("raw,expected", [
        ("Direct.", "direct"),
        ("  very   direct  ", "very direct"),
        ("\"Quoted!\"", "quoted"),
        ("keeps inner, punctuation", "keeps inner, punctuation"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_text(raw) == expected


class TestStrategies:

    def test_exact_is_literal(self):
        assert ExactMatch().matches("direct", "direct")
        assert not ExactMatch().matches("direct", "Direct.")

    def test_normalized_ignores_case_and_punctuation(self):
        assert NormalizedMatch().matches("direct", "Direct.")
        assert not NormalizedMatch().matches("direct", "indirect")

    def test_similarity_picks_best_candidate(self):
        class Row:
            def __init__(self, description):
                self.description = description

        rows = [Row("likes short answers"), Row("prefers concise answers")]
        best = SimilarityMatch(0.8).find(rows, "prefers concise answer", "description")
        assert best is rows[1]

    def test_similarity_cutoff_validated(self):
        with pytest.raises(ValueError):
            SimilarityMatch(0.0)

    @pytest.mark.parametrize("name,cls", [
        ("exact", ExactMatch),
        ("normalized", NormalizedMatch),
        ("similar", SimilarityMatch),
    ])
    def test_build_from_setting(self, name, cls):
        assert isinstance(build_match_strategy(name), cls)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            build_match_strategy("fuzzy")


class TestListSerialization:

    def test_encode_preserves_order(self):
        assert decode_list(encode_list(["b", "a"]), "f") == ["b", "a"]

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_absent_values_decode_empty(self, raw):
        assert decode_list(raw, "f") == []

    @pytest.mark.parametrize("raw", ["[", "42", '"text"', '["ok", null]'])
    def test_malformed_values_raise(self, raw):
        with pytest.raises(MalformedMemoryDataError) as exc_info:
            decode_list(raw, "user_patterns.evidence")
        assert exc_info.value.error_code == "MALFORMED_MEMORY_DATA"
        assert exc_info.value.context["raw"] == raw
