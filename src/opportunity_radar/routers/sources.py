"""Data-source health and social sentiment routes."""
from fastapi import APIRouter

from opportunity_radar.deps import StatusTableDep, TrackerDep
from opportunity_radar.schemas import DataSourceStatus, TermSentiment

router = APIRouter(prefix="/api", tags=["sources"])


@router.get("/data-sources/status", response_model=dict[str, DataSourceStatus])
def get_data_source_status(status: StatusTableDep) -> dict[str, DataSourceStatus]:
    """Latest {active, lastUpdate, error} per configured source."""
    return status.snapshot()


@router.get("/social/sentiment", response_model=list[TermSentiment])
def get_social_sentiment(tracker: TrackerDep) -> list[TermSentiment]:
    """Per-term sentiment from the most recent trend cycle (empty before the first)."""
    return tracker.term_sentiment()
