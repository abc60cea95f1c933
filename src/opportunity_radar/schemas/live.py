"""Source status records and live-channel envelopes."""
from datetime import datetime
from enum import Enum
from typing import Any

from opportunity_radar.schemas.base import CamelModel


class DataSourceStatus(CamelModel):
    active: bool = False
    last_update: datetime | None = None
    error: str | None = None


class EventType(str, Enum):
    """Envelope types pushed over the live channel."""

    OPPORTUNITIES_UPDATE = "opportunities_update"
    LIVE_UPDATE = "live_update"
    DATA_SOURCES_STATUS = "data_sources_status"
    DATA_SOURCE_UPDATE = "data_source_update"
    TWITTER_MENTIONS = "twitter_mentions"
    TWITTER_TRENDS = "twitter_trends"


class LiveMessage(CamelModel):
    type: EventType
    data: Any
