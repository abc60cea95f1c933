"""Per-user price alert routes."""
from fastapi import APIRouter, HTTPException, Query, status

from opportunity_radar.deps import AlertsDep
from opportunity_radar.schemas import PriceAlert, PriceAlertCreate

router = APIRouter(prefix="/api/alerts", tags=["alerts"])

ANONYMOUS = "anonymous"


@router.get("", response_model=list[PriceAlert])
def list_alerts(
    alerts: AlertsDep,
    user_id: str = Query(default=ANONYMOUS, alias="userId"),
) -> list[PriceAlert]:
    """Active alerts for one user."""
    return alerts.list_active(user_id)


@router.post("", response_model=PriceAlert, status_code=status.HTTP_201_CREATED)
def create_alert(
    alert: PriceAlertCreate,
    alerts: AlertsDep,
    user_id: str = Query(default=ANONYMOUS, alias="userId"),
) -> PriceAlert:
    return alerts.add(user_id, alert)


@router.post("/{alert_id}/deactivate", response_model=PriceAlert)
def deactivate_alert(
    alert_id: int,
    alerts: AlertsDep,
    user_id: str = Query(default=ANONYMOUS, alias="userId"),
) -> PriceAlert:
    alert = alerts.deactivate(user_id, alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert
