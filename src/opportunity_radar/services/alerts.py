"""Per-user price alerts, held in memory outside the opportunity store."""
import itertools
import threading
from collections import defaultdict

from opportunity_radar.schemas import PriceAlert, PriceAlertCreate


class PriceAlertBook:
    """Keyed collection of alerts per user.

    Alerts are never triggered or expired here; they are removed from listings
    by explicit deactivation.
    """

    def __init__(self) -> None:
        self._alerts: dict[str, list[PriceAlert]] = defaultdict(list)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, user_id: str, request: PriceAlertCreate) -> PriceAlert:
        with self._lock:
            alert = PriceAlert(
                id=next(self._ids),
                user_id=user_id,
                **request.model_dump(),
            )
            self._alerts[user_id].append(alert)
            return alert

    def list_active(self, user_id: str) -> list[PriceAlert]:
        with self._lock:
            return [a for a in self._alerts.get(user_id, []) if a.is_active]

    def deactivate(self, user_id: str, alert_id: int) -> PriceAlert | None:
        """Mark an alert inactive; None if the user has no such alert."""
        with self._lock:
            alerts = self._alerts.get(user_id, [])
            for index, alert in enumerate(alerts):
                if alert.id == alert_id:
                    alerts[index] = alert.model_copy(update={"is_active": False})
                    return alerts[index]
            return None
