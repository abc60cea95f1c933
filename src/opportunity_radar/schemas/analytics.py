"""Derived analytics views. Computed on demand, never persisted."""
from enum import Enum

from pydantic import Field

from opportunity_radar.schemas.base import CamelModel


class VelocityTrend(str, Enum):
    ACCELERATING = "accelerating"
    STEADY = "steady"
    SLOW = "slow"


class SourcePerformance(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class DashboardStats(CamelModel):
    total_opportunities: int = 0
    active_airdrops: int = 0
    new_listings: int = 0
    p2e_games: int = 0
    total_value: float = 0.0


class CategoryVelocity(CamelModel):
    """Discovery rate of one category over a trailing window."""

    category: str
    new_opportunities: int
    opportunity_count: int
    velocity_per_hour: float
    average_hotness: float
    leading_sources: list[str] = Field(default_factory=list)
    total_value: float = 0.0
    trend: VelocityTrend


class CategoryHotness(CamelModel):
    category: str
    average_hotness: float
    max_hotness: float
    count: int


class HotnessProgression(CamelModel):
    """Score distribution across fixed buckets plus per-category leaders."""

    score_distribution: dict[str, int]
    category_hotness: list[CategoryHotness] = Field(default_factory=list)
    average_global_hotness: float = 0.0
    total_opportunities: int = 0


class TopOpportunity(CamelModel):
    id: int
    name: str
    hotness: float


class SourceCorrelation(CamelModel):
    """Quality profile of one originating source."""

    source: str
    average_hotness: float
    total_opportunities: int
    recent_discoveries: int
    discovery_rate: float
    categories: list[str] = Field(default_factory=list)
    top_opportunities: list[TopOpportunity] = Field(default_factory=list)
    performance: SourcePerformance
