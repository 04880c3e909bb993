"""
Weight Vector - the instinct/logic/psyche blend consulted by response composition.
"""

import math
from enum import Enum
from typing import Tuple


from core import get_logger, InvalidWeightsError, RecordNotFoundError
from memory.database import Database
from memory.models import (
    UserProfile,
    DEFAULT_INSTINCT_WEIGHT,
    DEFAULT_LOGIC_WEIGHT,
    DEFAULT_PSYCHE_WEIGHT,
    utcnow,
)
from schemas import WeightVectorSchema

logger = get_logger(__name__)

DEFAULT_WEIGHTS = (DEFAULT_INSTINCT_WEIGHT, DEFAULT_LOGIC_WEIGHT, DEFAULT_PSYCHE_WEIGHT)
SUM_TOLERANCE = 1e-6


class WeightPolicy(str, Enum):
    """How set() treats an incoming weight triple."""

    PASSTHROUGH = "passthrough"  # stored verbatim
    NORMALIZE = "normalize"  # rescaled to sum 1.0
    STRICT = "strict"  # rejected unless non-negative and summing to 1.0


def apply_policy(
    weights: Tuple[float, float, float], policy: WeightPolicy
) -> Tuple[float, float, float]:
    """Return the triple to store under ``policy`` or raise InvalidWeightsError."""
    if policy == WeightPolicy.PASSTHROUGH:
        return weights

    if any(not math.isfinite(w) for w in weights):
        raise InvalidWeightsError(weights, "weights must be finite")
    if any(w < 0 for w in weights):
        raise InvalidWeightsError(weights, "weights must be non-negative")

    total = sum(weights)
    if policy == WeightPolicy.NORMALIZE:
        if total <= 0:
            raise InvalidWeightsError(weights, "weights must have a positive sum")
        return tuple(w / total for w in weights)

    if abs(total - 1.0) > SUM_TOLERANCE:
        raise InvalidWeightsError(weights, f"weights sum to {total}, expected 1.0")
    return weights


def _profile_to_schema(profile: UserProfile) -> WeightVectorSchema:
    return WeightVectorSchema(
        instinct=profile.instinct_weight,
        logic=profile.logic_weight,
        psyche=profile.psyche_weight,
        total_messages=profile.total_messages,
        updated_at=profile.updated_at,
    )


class WeightVectorStore:
    """Singleton weight vector kept on the user_profile row."""

    def __init__(self, db: Database, policy: WeightPolicy = WeightPolicy.PASSTHROUGH):
        self.db = db
        self.policy = WeightPolicy(policy)

    @staticmethod
    def _profile(session) -> UserProfile:
        profile = session.query(UserProfile).order_by(UserProfile.id).first()
        if profile is None:
            raise RecordNotFoundError("UserProfile", "singleton")
        return profile

    def get(self) -> WeightVectorSchema:
        with self.db.get_session() as session:
            return _profile_to_schema(self._profile(session))

    def set(self, instinct: float, logic: float, psyche: float) -> WeightVectorSchema:
        """
        Store a new weight triple.

        Under the default passthrough policy values are stored exactly as
        given, including negatives and triples that do not sum to 1.0.

        Raises:
            InvalidWeightsError: If the active policy rejects the triple
        """
        instinct, logic, psyche = apply_policy((instinct, logic, psyche), self.policy)
        with self.db.get_session() as session:
            profile = self._profile(session)
            profile.instinct_weight = instinct
            profile.logic_weight = logic
            profile.psyche_weight = psyche
            profile.updated_at = utcnow()
            logger.info(
                "Updated weights",
                instinct=instinct,
                logic=logic,
                psyche=psyche,
                policy=self.policy.value,
            )
            return _profile_to_schema(profile)

    def increment_message_count(self) -> int:
        """Bump total_messages and return the new value."""
        with self.db.get_session() as session:
            profile = self._profile(session)
            profile.total_messages += 1
            profile.updated_at = utcnow()
            return profile.total_messages

    def reset(self) -> WeightVectorSchema:
        """Restore the default weights and zero the message counter."""
        with self.db.get_session() as session:
            profile = self._profile(session)
            reset_profile(profile)
            logger.warning("Weights reset to defaults")
            return _profile_to_schema(profile)


def reset_profile(profile: UserProfile, clear_credentials: bool = False) -> None:
    """Reset ``profile`` in place. Used by WeightVectorStore.reset() and the bulk reset."""
    profile.instinct_weight, profile.logic_weight, profile.psyche_weight = DEFAULT_WEIGHTS
    profile.total_messages = 0
    profile.updated_at = utcnow()
    if clear_credentials:
        profile.api_key = None
        profile.anthropic_key = None
