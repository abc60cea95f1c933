"""Dashboard stats and historical analytics routes."""
from fastapi import APIRouter, Query

from opportunity_radar.deps import AnalyticsDep
from opportunity_radar.schemas import (CategoryVelocity, DashboardStats,
                                       HotnessProgression, SourceCorrelation)

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(analytics: AnalyticsDep) -> DashboardStats:
    return analytics.dashboard_stats()


@router.get("/analytics/velocity", response_model=list[CategoryVelocity])
def get_velocity(
    analytics: AnalyticsDep,
    hours: int = Query(default=24, ge=1, le=24 * 30, description="Trailing window in hours"),
) -> list[CategoryVelocity]:
    return analytics.velocity(hours=hours)


@router.get("/analytics/hotness-progression", response_model=HotnessProgression)
def get_hotness_progression(analytics: AnalyticsDep) -> HotnessProgression:
    return analytics.hotness_progression()


@router.get("/analytics/source-correlation", response_model=list[SourceCorrelation])
def get_source_correlation(analytics: AnalyticsDep) -> list[SourceCorrelation]:
    return analytics.source_correlation()
