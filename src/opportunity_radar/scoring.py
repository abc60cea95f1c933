"""Hotness scoring for newly discovered opportunities."""
import random

from opportunity_radar.schemas import HOTNESS_MAX, HOTNESS_MIN, OpportunityCandidate
from opportunity_radar.utils import clamp

RECENCY_BONUS = 100.0
FOLLOWERS_DIVISOR = 1000.0
FOLLOWERS_CAP = 50.0
DISCORD_DIVISOR = 500.0
DISCORD_CAP = 30.0
VOLUME_THRESHOLD = 100_000.0
VOLUME_BONUS = 40.0
VALUE_THRESHOLD = 500.0
VALUE_BONUS = 30.0
DEFAULT_JITTER = 50.0


class HotnessScorer:
    """Maps a candidate's attributes to a score in [0, 300].

    The score sums a fixed recency bonus (every candidate is new at ingestion),
    capped social-engagement terms, market-activity and value bonuses, and a
    uniform jitter in [0, jitter_amplitude). The random source is injectable;
    pass jitter_amplitude=0 for deterministic scores.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        jitter_amplitude: float = DEFAULT_JITTER,
    ) -> None:
        self._rng = rng or random.Random()
        self._jitter = jitter_amplitude

    def base_score(self, candidate: OpportunityCandidate) -> float:
        """Deterministic part of the score (no jitter, no clamp)."""
        score = RECENCY_BONUS
        if candidate.twitter_followers:
            score += min(candidate.twitter_followers / FOLLOWERS_DIVISOR, FOLLOWERS_CAP)
        if candidate.discord_members:
            score += min(candidate.discord_members / DISCORD_DIVISOR, DISCORD_CAP)
        if candidate.trading_volume > VOLUME_THRESHOLD:
            score += VOLUME_BONUS
        if candidate.estimated_value is not None and candidate.estimated_value > VALUE_THRESHOLD:
            score += VALUE_BONUS
        return score

    def score(self, candidate: OpportunityCandidate) -> float:
        jitter = self._rng.random() * self._jitter if self._jitter else 0.0
        return clamp(self.base_score(candidate) + jitter, HOTNESS_MIN, HOTNESS_MAX)
