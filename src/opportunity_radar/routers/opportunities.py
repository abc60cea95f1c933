"""Opportunity routes: listing, hot list, CRUD and score history."""
import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Response, status

from opportunity_radar.deps import AnalyticsDep, SettingsDep, StoreDep
from opportunity_radar.schemas import (HistoryPoint, OpportunityCandidate,
                                       OpportunityRead, OpportunityUpdate)
from opportunity_radar.services.store import exclude_denylisted

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/opportunities", tags=["opportunities"])

TIME_FRAME_HOURS = {"1h": 1, "6h": 6, "24h": 24, "7d": 7 * 24}
ALL_CATEGORIES = "all"
NOT_FOUND = "Opportunity not found"


@router.get("", response_model=list[OpportunityRead])
def list_opportunities(
    store: StoreDep,
    settings: SettingsDep,
    category: str | None = Query(default=None, description="Category label, or 'all'"),
    time_frame: Literal["1h", "6h", "24h", "7d"] | None = Query(default=None, alias="timeFrame"),
    search: str | None = Query(default=None, description="Case-insensitive text search"),
    limit: int | None = Query(default=None, ge=1, le=1000),
    exclude_mainstream: bool = Query(default=False, alias="excludeMainstream"),
) -> list[OpportunityRead]:
    """List active opportunities, hottest first.

    Only one filter applies: search, then category (unless 'all'), then
    time frame; with none of them every active record is returned.
    """
    if search and search.strip():
        records = store.search(search)
    elif category and category.strip().lower() != ALL_CATEGORIES:
        records = store.list_by_category(category)
    elif time_frame:
        records = store.list_by_timeframe(TIME_FRAME_HOURS[time_frame])
    else:
        records = store.list_all()

    if exclude_mainstream:
        records = exclude_denylisted(records, settings.mainstream_denylist)
    return records[:limit] if limit else records


@router.get("/hot", response_model=list[OpportunityRead])
def list_hot_opportunities(
    store: StoreDep,
    limit: int = Query(default=4, ge=1, le=100),
) -> list[OpportunityRead]:
    return store.list_hot(limit)


@router.get("/{opportunity_id}", response_model=OpportunityRead)
def get_opportunity(opportunity_id: int, store: StoreDep) -> OpportunityRead:
    record = store.get(opportunity_id)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return record


@router.post("", response_model=OpportunityRead, status_code=status.HTTP_201_CREATED)
def create_opportunity(candidate: OpportunityCandidate, store: StoreDep) -> OpportunityRead:
    """Create a record as submitted; manual creation never merges with existing records."""
    record = store.create(candidate)
    logger.info("Created opportunity %s (%s)", record.id, record.name)
    return record


@router.patch("/{opportunity_id}", response_model=OpportunityRead)
def update_opportunity(
    opportunity_id: int, changes: OpportunityUpdate, store: StoreDep
) -> OpportunityRead:
    record = store.update(opportunity_id, changes)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return record


@router.delete("/{opportunity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_opportunity(opportunity_id: int, store: StoreDep) -> Response:
    if not store.delete(opportunity_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{opportunity_id}/history", response_model=list[HistoryPoint])
def get_opportunity_history(
    opportunity_id: int,
    analytics: AnalyticsDep,
    days: int = Query(default=30, ge=1, le=365, description="Number of days of history"),
) -> list[HistoryPoint]:
    """Daily hotness/value series rebuilt from recorded score changes."""
    points = analytics.opportunity_history(opportunity_id, days=days)
    if points is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return points
