"""FastAPI dependency injection: resolve services from the container on app.state.

The lifespan (main.py) builds the container once; these getters are used by
Depends() in the routers.
"""
from typing import Annotated

from fastapi import Depends, Request, WebSocket

from opportunity_radar.config import Settings
from opportunity_radar.container import Container
from opportunity_radar.services.alerts import PriceAlertBook
from opportunity_radar.services.analytics import HistoricalAnalytics
from opportunity_radar.services.live_feed import LiveFeed
from opportunity_radar.services.sentiment import SentimentTracker
from opportunity_radar.services.source_status import DataSourceStatusTable
from opportunity_radar.services.store import OpportunityStore


def _container(request: Request) -> Container:
    return request.app.state.container


def get_settings_dep(request: Request) -> Settings:
    return _container(request).settings()


def get_store(request: Request) -> OpportunityStore:
    """Resolve the opportunity store (created at startup)."""
    return _container(request).store()


def get_analytics(request: Request) -> HistoricalAnalytics:
    return _container(request).analytics()


def get_alerts(request: Request) -> PriceAlertBook:
    return _container(request).alerts()


def get_status_table(request: Request) -> DataSourceStatusTable:
    return _container(request).status()


def get_tracker(request: Request) -> SentimentTracker:
    return _container(request).tracker()


def get_live_feed_ws(websocket: WebSocket) -> LiveFeed:
    """Resolve the live feed for a WebSocket connection."""
    return websocket.scope["app"].state.container.live_feed()


# Type aliases for route injection
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
StoreDep = Annotated[OpportunityStore, Depends(get_store)]
AnalyticsDep = Annotated[HistoricalAnalytics, Depends(get_analytics)]
AlertsDep = Annotated[PriceAlertBook, Depends(get_alerts)]
StatusTableDep = Annotated[DataSourceStatusTable, Depends(get_status_table)]
TrackerDep = Annotated[SentimentTracker, Depends(get_tracker)]
LiveFeedWs = Annotated[LiveFeed, Depends(get_live_feed_ws)]
