"""Read-only analytics projected from the current store contents.

Nothing here is persisted. Every view tolerates an empty store and returns
zeroed structures instead of failing.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta

from opportunity_radar.db import Category
from opportunity_radar.schemas import (CategoryHotness, CategoryVelocity,
                                       DashboardStats, HistoryPoint,
                                       HotnessProgression, OpportunityRead,
                                       SourceCorrelation, SourcePerformance,
                                       TopOpportunity, VelocityTrend)
from opportunity_radar.services.store import OpportunityStore
from opportunity_radar.utils import source_label, utcnow

# (label, lower bound inclusive); ordered from hottest to coldest.
SCORE_BUCKETS: tuple[tuple[str, float], ...] = (
    ("250-300", 250.0),
    ("200-249", 200.0),
    ("150-199", 150.0),
    ("100-149", 100.0),
    ("0-99", 0.0),
)

ACCELERATING_MIN_NEW = 5  # strictly more than this
STEADY_MIN_NEW = 2

PERFORMANCE_THRESHOLDS: tuple[tuple[float, SourcePerformance], ...] = (
    (200.0, SourcePerformance.EXCELLENT),
    (150.0, SourcePerformance.GOOD),
    (100.0, SourcePerformance.FAIR),
)

RECENT_WINDOW_HOURS = 24


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _velocity_trend(new_count: int) -> VelocityTrend:
    if new_count > ACCELERATING_MIN_NEW:
        return VelocityTrend.ACCELERATING
    if new_count > STEADY_MIN_NEW:
        return VelocityTrend.STEADY
    return VelocityTrend.SLOW


def _performance(average_hotness: float) -> SourcePerformance:
    for threshold, label in PERFORMANCE_THRESHOLDS:
        if average_hotness >= threshold:
            return label
    return SourcePerformance.POOR


def _bucket(score: float) -> str:
    for label, lower in SCORE_BUCKETS:
        if score >= lower:
            return label
    return SCORE_BUCKETS[-1][0]


class HistoricalAnalytics:
    """Velocity, score distribution, source quality and per-record history."""

    def __init__(self, store: OpportunityStore) -> None:
        self._store = store

    def dashboard_stats(self, now: datetime | None = None) -> DashboardStats:
        opportunities = self._store.list_all()
        cutoff = (now or utcnow()) - timedelta(hours=RECENT_WINDOW_HOURS)
        return DashboardStats(
            total_opportunities=len(opportunities),
            active_airdrops=sum(1 for o in opportunities if o.category == Category.AIRDROPS.value),
            new_listings=sum(
                1 for o in opportunities
                if o.category == Category.NEW_LISTINGS.value and o.created_at >= cutoff
            ),
            p2e_games=sum(1 for o in opportunities if o.category == Category.P2E_GAMES.value),
            total_value=sum(o.estimated_value or 0.0 for o in opportunities),
        )

    def velocity(self, hours: float = 24, now: datetime | None = None) -> list[CategoryVelocity]:
        """Per-category discovery rate over the trailing window, fastest first."""
        if hours <= 0:
            raise ValueError("hours must be positive")
        all_active = self._store.list_all()
        recent = self._store.list_by_timeframe(hours, now=now)

        totals: dict[str, int] = defaultdict(int)
        for opp in all_active:
            totals[opp.category] += 1

        by_category: dict[str, list[OpportunityRead]] = defaultdict(list)
        for opp in recent:
            by_category[opp.category].append(opp)

        results = []
        for category, items in by_category.items():
            results.append(
                CategoryVelocity(
                    category=category,
                    new_opportunities=len(items),
                    opportunity_count=totals.get(category, len(items)),
                    velocity_per_hour=round(len(items) / hours, 2),
                    average_hotness=round(_mean([o.hotness_score for o in items]), 1),
                    leading_sources=sorted({source_label(o.source_url) for o in items}),
                    total_value=sum(o.estimated_value or 0.0 for o in items),
                    trend=_velocity_trend(len(items)),
                )
            )
        results.sort(key=lambda v: v.velocity_per_hour, reverse=True)
        return results

    def hotness_progression(self) -> HotnessProgression:
        opportunities = self._store.list_all()
        distribution = {label: 0 for label, _ in SCORE_BUCKETS}
        by_category: dict[str, list[float]] = defaultdict(list)
        for opp in opportunities:
            distribution[_bucket(opp.hotness_score)] += 1
            by_category[opp.category].append(opp.hotness_score)

        leaders = [
            CategoryHotness(
                category=category,
                average_hotness=round(_mean(scores), 1),
                max_hotness=round(max(scores), 1),
                count=len(scores),
            )
            for category, scores in by_category.items()
        ]
        leaders.sort(key=lambda c: c.average_hotness, reverse=True)

        return HotnessProgression(
            score_distribution=distribution,
            category_hotness=leaders,
            average_global_hotness=round(_mean([o.hotness_score for o in opportunities]), 1),
            total_opportunities=len(opportunities),
        )

    def source_correlation(self, now: datetime | None = None) -> list[SourceCorrelation]:
        """Per-source quality profile, best average hotness first."""
        cutoff = (now or utcnow()) - timedelta(hours=RECENT_WINDOW_HOURS)
        by_source: dict[str, list[OpportunityRead]] = defaultdict(list)
        for opp in self._store.list_all():
            by_source[source_label(opp.source_url)].append(opp)

        results = []
        for source, items in by_source.items():
            average = _mean([o.hotness_score for o in items])
            recent = sum(1 for o in items if o.created_at >= cutoff)
            top = sorted(items, key=lambda o: o.hotness_score, reverse=True)[:3]
            results.append(
                SourceCorrelation(
                    source=source,
                    average_hotness=round(average, 1),
                    total_opportunities=len(items),
                    recent_discoveries=recent,
                    discovery_rate=round(recent / RECENT_WINDOW_HOURS, 2),
                    categories=sorted({o.category for o in items}),
                    top_opportunities=[
                        TopOpportunity(id=o.id, name=o.name, hotness=round(o.hotness_score, 1))
                        for o in top
                    ],
                    performance=_performance(average),
                )
            )
        results.sort(key=lambda s: s.average_hotness, reverse=True)
        return results

    def opportunity_history(
        self, opportunity_id: int, days: int = 30, today: date | None = None
    ) -> list[HistoryPoint] | None:
        """Daily score series rebuilt from recorded score events.

        One point per day from `today - days` to `today`, carrying the last
        score recorded on or before that day. Days before the first event are
        omitted. Returns None for an unknown opportunity.
        """
        if self._store.get(opportunity_id) is None:
            return None
        events = self._store.score_events(opportunity_id)
        end = today or utcnow().date()

        points = []
        index = 0
        latest = None
        for offset in range(days, -1, -1):
            day = end - timedelta(days=offset)
            while index < len(events) and events[index].recorded_at.date() <= day:
                latest = events[index]
                index += 1
            if latest is None:
                continue
            points.append(
                HistoryPoint(
                    date=day.isoformat(),
                    hotness_score=round(latest.hotness_score),
                    estimated_value=latest.estimated_value or 0.0,
                )
            )
        return points
