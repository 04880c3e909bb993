"""
Identity matching strategies for patterns and themes.

A strategy decides whether an incoming observation is the same thing as a
stored one. ExactMatch keeps literal string identity; the others fold
near-identical phrasings together.
"""

import re
import string
from difflib import SequenceMatcher

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Case-fold, collapse whitespace and strip surrounding punctuation."""
    text = _WHITESPACE.sub(" ", text.casefold()).strip()
    return text.strip(string.punctuation + " ")


class MatchStrategy:
    """Base strategy. Subclasses override matches()."""

    name = "base"
    # When True the store may resolve the match with a SQL equality filter
    exact = False

    def matches(self, existing: str, incoming: str) -> bool:
        raise NotImplementedError

    def find(self, candidates, incoming: str, attr: str):
        """Return the first candidate whose ``attr`` matches ``incoming``."""
        for candidate in candidates:
            if self.matches(getattr(candidate, attr), incoming):
                return candidate
        return None

    def __repr__(self):
        return f"<{self.__class__.__name__}>"


class ExactMatch(MatchStrategy):
    name = "exact"
    exact = True

    def matches(self, existing: str, incoming: str) -> bool:
        return existing == incoming


class NormalizedMatch(MatchStrategy):
    name = "normalized"

    def matches(self, existing: str, incoming: str) -> bool:
        return normalize_text(existing) == normalize_text(incoming)


class SimilarityMatch(MatchStrategy):
    """Fuzzy match on normalized text using difflib's ratio."""

    name = "similar"

    def __init__(self, cutoff: float = 0.9):
        if not 0.0 < cutoff <= 1.0:
            raise ValueError("cutoff must be in (0, 1]")
        self.cutoff = cutoff

    def ratio(self, existing: str, incoming: str) -> float:
        return SequenceMatcher(None, normalize_text(existing), normalize_text(incoming)).ratio()

    def matches(self, existing: str, incoming: str) -> bool:
        return self.ratio(existing, incoming) >= self.cutoff

    def find(self, candidates, incoming: str, attr: str):
        # Best match wins, not the first one above the cutoff
        best, best_ratio = None, self.cutoff
        for candidate in candidates:
            r = self.ratio(getattr(candidate, attr), incoming)
            if r > best_ratio or (best is None and r == best_ratio):
                best, best_ratio = candidate, r
        return best

    def __repr__(self):
        return f"<SimilarityMatch(cutoff={self.cutoff})>"


def build_match_strategy(name: str, cutoff: float = 0.9) -> MatchStrategy:
    """Map a settings value ("exact", "normalized", "similar") to a strategy."""
    if name == "exact":
        return ExactMatch()
    if name == "normalized":
        return NormalizedMatch()
    if name == "similar":
        return SimilarityMatch(cutoff)
    raise ValueError(f"Unknown match strategy: {name}")
