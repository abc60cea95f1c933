"""API routers.

Includes routes for:
- /api/opportunities - listing, hot list, CRUD and history
- /api/stats, /api/analytics/* - dashboard stats and analytics views
- /api/alerts - per-user price alerts
- /api/data-sources/status, /api/social/sentiment - source health and sentiment
- /ws - live push channel
"""
from opportunity_radar.routers.alerts import router as alerts_router
from opportunity_radar.routers.analytics import router as analytics_router
from opportunity_radar.routers.live import router as live_router
from opportunity_radar.routers.opportunities import \
    router as opportunities_router
from opportunity_radar.routers.sources import router as sources_router

__all__ = [
    "alerts_router",
    "analytics_router",
    "live_router",
    "opportunities_router",
    "sources_router",
]
