"""Pydantic schemas for API and runtime use."""
from opportunity_radar.schemas.alerts import (AlertCondition, PriceAlert,
                                              PriceAlertCreate)
from opportunity_radar.schemas.analytics import (CategoryHotness,
                                                 CategoryVelocity,
                                                 DashboardStats,
                                                 HotnessProgression,
                                                 SourceCorrelation,
                                                 SourcePerformance,
                                                 TopOpportunity, VelocityTrend)
from opportunity_radar.schemas.base import CamelModel
from opportunity_radar.schemas.live import (DataSourceStatus, EventType,
                                            LiveMessage)
from opportunity_radar.schemas.opportunity import (HOTNESS_MAX, HOTNESS_MIN,
                                                   HistoryPoint,
                                                   OpportunityCandidate,
                                                   OpportunityRead,
                                                   OpportunityUpdate)
from opportunity_radar.schemas.social import (PublicMetrics, Sentiment,
                                              SentimentTrend, SocialMention,
                                              TermSentiment)

__all__ = [
    "AlertCondition",
    "CamelModel",
    "CategoryHotness",
    "CategoryVelocity",
    "DashboardStats",
    "DataSourceStatus",
    "EventType",
    "HOTNESS_MAX",
    "HOTNESS_MIN",
    "HistoryPoint",
    "HotnessProgression",
    "LiveMessage",
    "OpportunityCandidate",
    "OpportunityRead",
    "OpportunityUpdate",
    "PriceAlert",
    "PriceAlertCreate",
    "PublicMetrics",
    "Sentiment",
    "SentimentTrend",
    "SocialMention",
    "SourceCorrelation",
    "SourcePerformance",
    "TermSentiment",
    "TopOpportunity",
    "VelocityTrend",
]
